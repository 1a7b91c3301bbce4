from typing import Optional, Union

from email_validator import EmailNotValidError
from email_validator import validate_email as check_email

from joblit.exceptions import InvalidInputError
from joblit.models.user import UserType


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_email(email: Optional[str]) -> str:
    if is_blank(email):
        raise InvalidInputError("Email must be filled in.")
    email = email.strip()
    try:
        check_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise InvalidInputError(f"Please enter a proper email address. {e}") from e
    return email


def validate_new_password(password: Optional[str], confirm_password: Optional[str]) -> None:
    if confirm_password is not None and password != confirm_password:
        raise InvalidInputError("The passwords don't match.")


def validate_registration(candidate) -> None:
    """Check a RegistrationCandidate before anything is written."""
    if is_blank(candidate.username) or not candidate.password or is_blank(candidate.email):
        raise InvalidInputError("Username, Password, and Email must be filled in.")

    validate_new_password(candidate.password, candidate.confirm_password)
    validate_email(candidate.email)

    if candidate.type == UserType.SEEKER:
        if is_blank(candidate.full_name):
            raise InvalidInputError("Please enter your Full Name.")
    elif candidate.type == UserType.EMPLOYER:
        if is_blank(candidate.company_name):
            raise InvalidInputError("Please enter your Company Name.")
    else:
        raise InvalidInputError(f"Unknown account type: {candidate.type}")


def validate_job_fields(title: Optional[str], description: Optional[str], location: Optional[str]) -> None:
    if is_blank(title) or is_blank(description) or is_blank(location):
        raise InvalidInputError("Please fill in Job Title, Description, and Location.")


def parse_salary(raw: Union[float, int, str, None]) -> float:
    """
    Turn whatever the caller typed into a stored salary.

    Missing, blank or unparsable input and negative numbers all become 0,
    which means "not given". A bad salary never rejects a post.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, str):
        raw = raw.strip().replace(",", "")
        if not raw:
            return 0.0
    try:
        salary = float(raw)
    except (TypeError, ValueError):
        return 0.0
    # NaN fails every comparison, so `salary >= 0` also catches it
    if not salary >= 0 or salary == float("inf"):
        return 0.0
    return salary
