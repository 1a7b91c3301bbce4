import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from joblit.exceptions import DuplicateUserError, InvalidInputError
from joblit.models.application import Application
from joblit.models.job import Job
from joblit.models.user import User, UserType
from joblit.schema.user_schema import EmployerProfile, RegistrationCandidate, SeekerProfile, UserAccount
from joblit.utils.security import hash_password, verify_password
from joblit.utils.validators import is_blank, validate_email, validate_registration

logger = logging.getLogger(__name__)


def _rollback(db: Session) -> None:
    try:
        db.rollback()
    except SQLAlchemyError:
        logger.exception("Problem undoing changes")


def _duplicate_field(db: Session, username: str) -> str:
    if username and db.query(User.id).filter(User.username == username).first():
        return "username"
    return "email"


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, candidate: RegistrationCandidate) -> User:
    """Insert a new seeker or employer. Columns of the other variant stay NULL."""
    validate_registration(candidate)

    user = User(
        username=candidate.username.strip(),
        email=candidate.email.strip(),
        password_hash=hash_password(candidate.password),
        type=candidate.type,
    )
    if candidate.type == UserType.SEEKER:
        user.full_name = candidate.full_name.strip()
        user.skills = (candidate.skills or "").strip()
        user.resume_info = (candidate.resume_info or "").strip()
    else:
        user.company_name = candidate.company_name.strip()

    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        _rollback(db)
        raise DuplicateUserError(_duplicate_field(db, candidate.username.strip())) from e
    except SQLAlchemyError:
        _rollback(db)
        raise

    db.refresh(user)
    logger.info("Registered %s account %r (id=%s)", user.type.value, user.username, user.id)
    return user


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    """Same result for an unknown username and a wrong password."""
    user = get_user_by_username(db, username)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def update_user(db: Session, account: UserAccount, password: Optional[str] = None) -> bool:
    """
    Save email, password and the variant fields of an existing account.

    The stored type is part of the WHERE clause, so an account can never be
    switched to the other variant. Returns True if a row was changed.
    """
    values = {"email": validate_email(account.email)}
    if password:
        values["password_hash"] = hash_password(password)

    profile = account.profile
    if account.type == UserType.SEEKER and isinstance(profile, SeekerProfile):
        if is_blank(profile.full_name):
            raise InvalidInputError("Email and Full Name cannot be empty.")
        values.update(
            full_name=profile.full_name.strip(),
            skills=profile.skills,
            resume_info=profile.resume_info,
            company_name=None,
        )
    elif account.type == UserType.EMPLOYER and isinstance(profile, EmployerProfile):
        if is_blank(profile.company_name):
            raise InvalidInputError("Email and Company Name cannot be empty.")
        values.update(
            full_name=None,
            skills=None,
            resume_info=None,
            company_name=profile.company_name.strip(),
        )
    else:
        raise InvalidInputError("Profile does not match the account type")

    try:
        changed = (
            db.query(User)
            .filter(User.id == account.id, User.type == account.type)
            .update(values, synchronize_session=False)
        )
        db.commit()
    except IntegrityError as e:
        _rollback(db)
        raise DuplicateUserError("email") from e
    except SQLAlchemyError:
        _rollback(db)
        raise
    return changed > 0


def save_resume_info(db: Session, seeker_id: int, resume_info: str, skills: str) -> bool:
    try:
        changed = (
            db.query(User)
            .filter(User.id == seeker_id, User.type == UserType.SEEKER)
            .update({"resume_info": resume_info, "skills": skills}, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        _rollback(db)
        raise
    return changed > 0


def delete_user(db: Session, user_id: int, user_type: UserType) -> bool:
    """
    Remove an account together with everything that depends on it.

    Seekers lose their applications. Employers lose the applications to
    their jobs, then the jobs. The user row goes last, and nothing is
    committed unless that row was actually removed.
    """
    try:
        if user_type == UserType.SEEKER:
            db.query(Application).filter(
                Application.seeker_id == user_id
            ).delete(synchronize_session=False)
        elif user_type == UserType.EMPLOYER:
            employer_jobs = select(Job.id).where(Job.employer_id == user_id)
            db.query(Application).filter(
                Application.job_id.in_(employer_jobs)
            ).delete(synchronize_session=False)
            db.query(Job).filter(Job.employer_id == user_id).delete(synchronize_session=False)

        removed = (
            db.query(User)
            .filter(User.id == user_id, User.type == user_type)
            .delete(synchronize_session=False)
        )
        if not removed:
            _rollback(db)
            logger.info("No %s account with id %s, nothing deleted", user_type.value, user_id)
            return False

        db.commit()
    except SQLAlchemyError:
        _rollback(db)
        raise

    logger.info("Deleted %s account %s and its dependent rows", user_type.value, user_id)
    return True
