import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from joblit import config

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def _on_sqlite_connect(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    # let SQLAlchemy emit BEGIN itself, pysqlite otherwise breaks SAVEPOINT
    dbapi_connection.isolation_level = None


def _on_sqlite_begin(conn):
    conn.exec_driver_sql("BEGIN")


class Database:
    """
    Persistence handle shared by the services.

    Open it once at startup, take one session per operation with
    ``session()``, and ``close()`` it at shutdown.
    """

    def __init__(self, url: Optional[str] = None, echo: bool = False):
        self.url = url or config.DATABASE_URL
        engine_kwargs = {"future": True, "echo": echo}

        parsed = make_url(self.url)
        if parsed.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if parsed.database in (None, "", ":memory:"):
                # one shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(self.url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _on_sqlite_connect)
            event.listen(self.engine, "begin", _on_sqlite_begin)

        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )

    def create_all(self) -> None:
        # register the tables on Base.metadata
        from joblit.models import application, job, user  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        from joblit.models import application, job, user  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connection closed")


def get_database(request: Request) -> Database:
    return request.app.state.database
