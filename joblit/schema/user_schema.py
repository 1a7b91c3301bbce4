from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, EmailStr, Field

from joblit.models.user import User, UserType


# ----------------- Variant payloads -----------------
class SeekerProfile(BaseModel):
    type: Literal[UserType.SEEKER] = UserType.SEEKER
    full_name: str
    skills: str = ""
    resume_info: str = ""


class EmployerProfile(BaseModel):
    type: Literal[UserType.EMPLOYER] = UserType.EMPLOYER
    company_name: str


Profile = Annotated[Union[SeekerProfile, EmployerProfile], Field(discriminator="type")]


# ----------------- Account -----------------
class UserAccount(BaseModel):
    """A user as the services hand it out: common fields plus the payload for its type."""

    id: int
    username: str
    email: str
    type: UserType
    profile: Profile
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, user: User) -> "UserAccount":
        if user.type == UserType.SEEKER:
            profile = SeekerProfile(
                full_name=user.full_name or "",
                skills=user.skills or "",
                resume_info=user.resume_info or "",
            )
        else:
            profile = EmployerProfile(company_name=user.company_name or "")

        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            type=user.type,
            profile=profile,
            created_at=user.created_at,
        )


# ----------------- Registration -----------------
class RegistrationCandidate(BaseModel):
    username: str
    password: str
    email: str
    type: UserType
    confirm_password: Optional[str] = None

    # SEEKER
    full_name: Optional[str] = None
    skills: Optional[str] = None
    resume_info: Optional[str] = None

    # EMPLOYER
    company_name: Optional[str] = None


# ----------------- Profile editing -----------------
class ProfileUpdate(BaseModel):
    email: EmailStr
    password: Optional[str] = None
    confirm_password: Optional[str] = None
    full_name: Optional[str] = None
    skills: Optional[str] = None
    resume_info: Optional[str] = None
    company_name: Optional[str] = None


class ResumeUpdate(BaseModel):
    resume_info: str = ""
    skills: str = ""
