import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from joblit.crud import user_crud
from joblit.database import Database
from joblit.exceptions import DuplicateUserError
from joblit.schema.user_schema import RegistrationCandidate, UserAccount

logger = logging.getLogger(__name__)


class AccountService:
    """
    Registration, login and profile management.

    Input problems raise InvalidInputError with a message meant for the user.
    Everything else (taken usernames, an unreachable database, ids that
    match nothing) is logged here and comes back as False or None.
    """

    def __init__(self, database: Database):
        self.database = database

    def register(self, candidate: RegistrationCandidate) -> bool:
        with self.database.session() as db:
            try:
                user_crud.create_user(db, candidate)
            except DuplicateUserError as e:
                logger.warning("Registration of %r rejected: %s", candidate.username, e)
                return False
            except SQLAlchemyError:
                logger.exception("Problem adding user %r", candidate.username)
                return False
        return True

    def authenticate(self, username: str, password: str) -> Optional[UserAccount]:
        with self.database.session() as db:
            try:
                user = user_crud.authenticate_user(db, username, password)
            except SQLAlchemyError:
                logger.exception("Problem checking login for %r", username)
                return None
            if user is None:
                logger.info("Failed login for %r", username)
                return None
            return UserAccount.from_row(user)

    def get_user(self, user_id: int) -> Optional[UserAccount]:
        with self.database.session() as db:
            try:
                user = user_crud.get_user_by_id(db, user_id)
            except SQLAlchemyError:
                logger.exception("Problem loading user %s", user_id)
                return None
            return UserAccount.from_row(user) if user else None

    def update_profile(self, user: UserAccount, password: Optional[str] = None) -> bool:
        """Save the account's email and profile fields, and the password when a new one is given."""
        with self.database.session() as db:
            try:
                return user_crud.update_user(db, user, password=password)
            except DuplicateUserError as e:
                logger.warning("Profile update for user %s rejected: %s", user.id, e)
                return False
            except SQLAlchemyError:
                logger.exception("Problem updating profile of user %s", user.id)
                return False

    def save_resume(self, seeker_id: int, resume_info: str, skills: str) -> bool:
        with self.database.session() as db:
            try:
                return user_crud.save_resume_info(db, seeker_id, resume_info, skills)
            except SQLAlchemyError:
                logger.exception("Problem saving CV info for user %s", seeker_id)
                return False

    def delete_profile(self, user: UserAccount) -> bool:
        with self.database.session() as db:
            try:
                return user_crud.delete_user(db, user.id, user.type)
            except SQLAlchemyError:
                logger.exception("Problem deleting profile of user %s", user.id)
                return False
