import logging
from typing import List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from joblit.crud import job_crud
from joblit.database import Database
from joblit.schema.job_schema import JobRead

logger = logging.getLogger(__name__)


class JobService:
    def __init__(self, database: Database):
        self.database = database

    def post_job(
        self,
        employer_id: int,
        title: str,
        description: str,
        location: str,
        salary: Union[float, str, None] = None,
        company_name: Optional[str] = None
    ) -> Optional[JobRead]:
        with self.database.session() as db:
            try:
                job = job_crud.create_job(
                    db,
                    employer_id=employer_id,
                    title=title,
                    description=description,
                    location=location,
                    salary=salary,
                    company_name=company_name,
                )
            except SQLAlchemyError:
                logger.exception("Problem saving job %r for employer %s", title, employer_id)
                return None
            logger.info("Employer %s posted job %s (%r)", employer_id, job.id, job.title)
            return JobRead.model_validate(job)

    def get_job(self, job_id: int) -> Optional[JobRead]:
        with self.database.session() as db:
            try:
                job = job_crud.get_job_by_id(db, job_id)
            except SQLAlchemyError:
                logger.exception("Problem loading job %s", job_id)
                return None
            return JobRead.model_validate(job) if job else None

    def update_job(self, job: JobRead) -> bool:
        with self.database.session() as db:
            try:
                return job_crud.update_job(db, job)
            except SQLAlchemyError:
                logger.exception("Problem updating job %s", job.id)
                return False

    def delete_job(self, job_id: int) -> bool:
        with self.database.session() as db:
            try:
                return job_crud.delete_job(db, job_id)
            except SQLAlchemyError:
                logger.exception("Problem deleting job %s", job_id)
                return False

    def list_all(self) -> List[JobRead]:
        with self.database.session() as db:
            try:
                jobs = job_crud.get_all_jobs(db)
            except SQLAlchemyError:
                logger.exception("Problem getting all jobs")
                return []
            return [JobRead.model_validate(job) for job in jobs]

    def list_by_employer(self, employer_id: int) -> List[JobRead]:
        with self.database.session() as db:
            try:
                jobs = job_crud.get_jobs_by_employer(db, employer_id)
            except SQLAlchemyError:
                logger.exception("Problem getting jobs for employer %s", employer_id)
                return []
            return [JobRead.model_validate(job) for job in jobs]

    def search(self, term: Optional[str]) -> List[JobRead]:
        with self.database.session() as db:
            try:
                jobs = job_crud.search_jobs(db, term)
            except SQLAlchemyError:
                logger.exception("Problem searching jobs for %r", term)
                return []
            return [JobRead.model_validate(job) for job in jobs]
