import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from joblit.crud import application_crud
from joblit.database import Database
from joblit.exceptions import AlreadyAppliedError, InvalidInputError
from joblit.schema.job_schema import JobRead
from joblit.schema.user_schema import UserAccount

logger = logging.getLogger(__name__)


class ApplicationService:
    def __init__(self, database: Database):
        self.database = database

    def apply(self, seeker_id: int, job_id: int) -> bool:
        """Apply for a job. False if already applied, or if the seeker or job does not exist."""
        with self.database.session() as db:
            try:
                application_crud.create_application(db, seeker_id, job_id)
            except AlreadyAppliedError as e:
                logger.info("%s", e)
                return False
            except InvalidInputError as e:
                logger.warning("Application of user %s to job %s rejected: %s", seeker_id, job_id, e)
                return False
            except SQLAlchemyError:
                logger.exception("Problem applying user %s to job %s", seeker_id, job_id)
                return False
        logger.info("User %s applied for job %s", seeker_id, job_id)
        return True

    def withdraw(self, seeker_id: int, job_id: int) -> bool:
        with self.database.session() as db:
            try:
                return application_crud.delete_application(db, seeker_id, job_id)
            except SQLAlchemyError:
                logger.exception("Problem deleting application of user %s to job %s", seeker_id, job_id)
                return False

    def has_applied(self, seeker_id: int, job_id: int) -> bool:
        with self.database.session() as db:
            try:
                return application_crud.has_applied(db, seeker_id, job_id)
            except SQLAlchemyError:
                logger.exception("Problem checking if user %s applied to job %s", seeker_id, job_id)
                return False

    def list_applicants(self, job_id: int) -> List[UserAccount]:
        with self.database.session() as db:
            try:
                seekers = application_crud.get_applicants_for_job(db, job_id)
            except SQLAlchemyError:
                logger.exception("Problem getting applicants for job %s", job_id)
                return []
            return [UserAccount.from_row(seeker) for seeker in seekers]

    def list_applied_jobs(self, seeker_id: int) -> List[JobRead]:
        with self.database.session() as db:
            try:
                jobs = application_crud.get_applied_jobs(db, seeker_id)
            except SQLAlchemyError:
                logger.exception("Problem getting applied jobs for user %s", seeker_id)
                return []
            return [JobRead.model_validate(job) for job in jobs]
