from typing import Optional

from fastapi import Depends, HTTPException, status

from joblit.database import Database, get_database
from joblit.models.user import UserType
from joblit.schema.user_schema import UserAccount
from joblit.services.account_service import AccountService
from joblit.services.application_service import ApplicationService
from joblit.services.job_service import JobService
from joblit.utils.security import decode_access_token, oauth2_scheme


def get_account_service(database: Database = Depends(get_database)) -> AccountService:
    return AccountService(database)


def get_job_service(database: Database = Depends(get_database)) -> JobService:
    return JobService(database)


def get_application_service(database: Database = Depends(get_database)) -> ApplicationService:
    return ApplicationService(database)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    accounts: AccountService = Depends(get_account_service)
) -> UserAccount:
    """Resolve the bearer token to the account it was issued for."""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"}
        )

    user = accounts.get_user(decode_access_token(token))
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"}
        )
    return user


def require_seeker(current_user: UserAccount = Depends(get_current_user)) -> UserAccount:
    if current_user.type != UserType.SEEKER:
        raise HTTPException(status_code=403, detail="Only job seekers can do this")
    return current_user


def require_employer(current_user: UserAccount = Depends(get_current_user)) -> UserAccount:
    if current_user.type != UserType.EMPLOYER:
        raise HTTPException(status_code=403, detail="Only employers can do this")
    return current_user
