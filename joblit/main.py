import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from joblit import config
from joblit.database import Database
from joblit.routes import application_routes, auth_routes, job_routes, profile_routes


def create_app(database: Optional[Database] = None) -> FastAPI:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    database = database or Database()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_all()
        yield
        database.close()

    app = FastAPI(title="JobLit Backend", lifespan=lifespan)
    app.state.database = database

    @app.get("/")
    def root():
        return {"message": "JobLit backend is running!"}

    app.include_router(auth_routes.router)
    app.include_router(profile_routes.router)
    app.include_router(job_routes.router)
    app.include_router(application_routes.router)
    return app


app = create_app()
