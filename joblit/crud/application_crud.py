import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import and_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from joblit.exceptions import AlreadyAppliedError, InvalidInputError
from joblit.models.application import Application
from joblit.models.job import Job
from joblit.models.user import User, UserType

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def has_applied(db: Session, seeker_id: int, job_id: int) -> bool:
    return db.query(Application.seeker_id).filter(
        and_(
            Application.seeker_id == seeker_id,
            Application.job_id == job_id
        )
    ).first() is not None


def _insert_if_absent(db: Session, seeker_id: int, job_id: int) -> bool:
    """One atomic statement; the composite primary key decides who wins a race."""
    values = {
        "seeker_id": seeker_id,
        "job_id": job_id,
        "applied_at": datetime.now(timezone.utc),
    }
    insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if insert is not None:
        stmt = insert(Application.__table__).values(**values).on_conflict_do_nothing(
            index_elements=["seeker_id", "job_id"]
        )
        return db.execute(stmt).rowcount > 0

    try:
        with db.begin_nested():
            db.execute(Application.__table__.insert().values(**values))
    except IntegrityError:
        if has_applied(db, seeker_id, job_id):
            return False
        raise
    return True


def create_application(db: Session, seeker_id: int, job_id: int) -> Application:
    """Record that a seeker applied for a job"""
    seeker = db.query(User).filter(User.id == seeker_id).first()
    if not seeker or seeker.type != UserType.SEEKER:
        raise InvalidInputError("Only job seekers can apply")

    if not db.query(Job.id).filter(Job.id == job_id).first():
        raise InvalidInputError("Job not found")

    try:
        inserted = _insert_if_absent(db, seeker_id, job_id)
        if not inserted:
            db.rollback()
            raise AlreadyAppliedError(seeker_id, job_id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    return db.query(Application).filter(
        Application.seeker_id == seeker_id,
        Application.job_id == job_id
    ).one()


def delete_application(db: Session, seeker_id: int, job_id: int) -> bool:
    """Withdraw an application. Returns True if one was removed."""
    try:
        removed = db.query(Application).filter(
            and_(
                Application.seeker_id == seeker_id,
                Application.job_id == job_id
            )
        ).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    return removed > 0


def get_applicants_for_job(db: Session, job_id: int) -> List[User]:
    return (
        db.query(User)
        .join(Application, Application.seeker_id == User.id)
        .filter(Application.job_id == job_id, User.type == UserType.SEEKER)
        .all()
    )


def get_applied_jobs(db: Session, seeker_id: int) -> List[Job]:
    return (
        db.query(Job)
        .join(Application, Application.job_id == Job.id)
        .filter(Application.seeker_id == seeker_id)
        .order_by(Application.applied_at.desc(), Job.id.desc())
        .all()
    )
