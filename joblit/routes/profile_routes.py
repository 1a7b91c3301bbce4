from fastapi import APIRouter, Depends, HTTPException

from joblit.exceptions import InvalidInputError
from joblit.models.user import UserType
from joblit.routes.dependencies import get_account_service, get_current_user, require_seeker
from joblit.schema.user_schema import (
    EmployerProfile,
    ProfileUpdate,
    ResumeUpdate,
    SeekerProfile,
    UserAccount
)
from joblit.services.account_service import AccountService
from joblit.utils.validators import validate_new_password

router = APIRouter(prefix="/profile", tags=["profile"])


@router.put("", response_model=UserAccount)
def update_profile(
    data: ProfileUpdate,
    current_user: UserAccount = Depends(get_current_user),
    accounts: AccountService = Depends(get_account_service)
):
    """Edit email, password and the fields that belong to the account type"""
    if current_user.type == UserType.SEEKER:
        current = current_user.profile
        profile = SeekerProfile(
            full_name=data.full_name if data.full_name is not None else current.full_name,
            skills=data.skills if data.skills is not None else current.skills,
            resume_info=data.resume_info if data.resume_info is not None else current.resume_info,
        )
    else:
        current = current_user.profile
        profile = EmployerProfile(
            company_name=data.company_name if data.company_name is not None else current.company_name
        )

    updated = current_user.model_copy(update={"email": str(data.email), "profile": profile})
    try:
        if data.password:
            validate_new_password(data.password, data.confirm_password)
        saved = accounts.update_profile(updated, password=data.password or None)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not saved:
        raise HTTPException(status_code=400, detail="Failed to update profile.")
    return accounts.get_user(current_user.id)


@router.put("/resume", response_model=UserAccount)
def save_resume(
    data: ResumeUpdate,
    current_user: UserAccount = Depends(require_seeker),
    accounts: AccountService = Depends(get_account_service)
):
    if not accounts.save_resume(current_user.id, data.resume_info.strip(), data.skills.strip()):
        raise HTTPException(status_code=400, detail="Could not save profile information.")
    return accounts.get_user(current_user.id)


@router.delete("")
def delete_profile(
    current_user: UserAccount = Depends(get_current_user),
    accounts: AccountService = Depends(get_account_service)
):
    if not accounts.delete_profile(current_user):
        raise HTTPException(status_code=400, detail="Failed to delete profile.")
    return {"message": "Profile deleted successfully."}
