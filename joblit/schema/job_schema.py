from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel


class JobCreate(BaseModel):
    title: str
    description: str
    location: str
    # Free text from the form; anything that is not a non-negative number becomes 0
    salary: Optional[Union[float, str]] = None


class JobUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[Union[float, str]] = None


class JobRead(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    employer_id: int
    title: str
    description: str
    location: str
    salary: float
    company_name: Optional[str] = None
    posted_at: Optional[datetime] = None
