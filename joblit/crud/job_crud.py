import logging
from typing import List, Optional, Union

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from joblit.exceptions import InvalidInputError
from joblit.models.application import Application
from joblit.models.job import Job
from joblit.models.user import User, UserType
from joblit.schema.job_schema import JobRead
from joblit.utils.validators import parse_salary, validate_job_fields

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def _newest_first(query: Query) -> Query:
    return query.order_by(Job.posted_at.desc(), Job.id.desc())


def _like_pattern(term: str) -> str:
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def create_job(
    db: Session,
    employer_id: int,
    title: str,
    description: str,
    location: str,
    salary: Union[float, str, None] = None,
    company_name: Optional[str] = None
) -> Job:
    validate_job_fields(title, description, location)

    employer = db.query(User).filter(User.id == employer_id).first()
    if not employer or employer.type != UserType.EMPLOYER:
        raise InvalidInputError("Only employers can post jobs")

    job = Job(
        employer_id=employer_id,
        title=title.strip(),
        description=description.strip(),
        location=location.strip(),
        salary=parse_salary(salary),
        company_name=company_name if company_name is not None else employer.company_name,
    )
    db.add(job)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(job)
    return job


def get_job_by_id(db: Session, job_id: int) -> Optional[Job]:
    return db.query(Job).filter(Job.id == job_id).first()


def get_all_jobs(db: Session) -> List[Job]:
    return _newest_first(db.query(Job)).all()


def get_jobs_by_employer(db: Session, employer_id: int) -> List[Job]:
    return _newest_first(db.query(Job).filter(Job.employer_id == employer_id)).all()


def search_jobs(db: Session, term: Optional[str]) -> List[Job]:
    """Substring match on title, description or location, ignoring case. No term matches everything."""
    pattern = _like_pattern(term or "")
    query = db.query(Job).filter(
        or_(
            Job.title.ilike(pattern, escape=LIKE_ESCAPE),
            Job.description.ilike(pattern, escape=LIKE_ESCAPE),
            Job.location.ilike(pattern, escape=LIKE_ESCAPE),
        )
    )
    return _newest_first(query).all()


def update_job(db: Session, job: JobRead) -> bool:
    """Save title, description, location and salary. Owner and company name never change."""
    validate_job_fields(job.title, job.description, job.location)

    try:
        changed = (
            db.query(Job)
            .filter(Job.id == job.id)
            .update(
                {
                    "title": job.title.strip(),
                    "description": job.description.strip(),
                    "location": job.location.strip(),
                    "salary": parse_salary(job.salary),
                },
                synchronize_session=False
            )
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    return changed > 0


def delete_job(db: Session, job_id: int) -> bool:
    """Delete a job and the applications made to it."""
    try:
        db.query(Application).filter(Application.job_id == job_id).delete(synchronize_session=False)
        removed = db.query(Job).filter(Job.id == job_id).delete(synchronize_session=False)
        if not removed:
            db.rollback()
            return False
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    return True
