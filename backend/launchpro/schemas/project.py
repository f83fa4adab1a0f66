from pydantic import BaseModel, field_validator, model_validator
from datetime import datetime
from enum import Enum
from typing import List, Optional

from launchpro.schemas.common import strip_optional
from launchpro.schemas.user import UserOut
from launchpro.utils.timeutils import as_utc


class ProjectRoleEnum(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    MEMBER = "member"


# ---------- CREATE ----------
class ProjectCreate(BaseModel):
    name: str
    description: Optional[str] = None
    status: Optional[str] = "active"
    start_date: Optional[datetime] = None
    deadline: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Project name is required")
        return cleaned

    @field_validator("description", "status", mode="before")
    @classmethod
    def normalize_optional_strings(cls, value):
        return strip_optional(value)

    @model_validator(mode="after")
    def validate_dates(self):
        if self.start_date and self.deadline and as_utc(self.deadline) < as_utc(self.start_date):
            raise ValueError("Project deadline cannot be before start date")
        return self


# ---------- UPDATE ----------
class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[datetime] = None
    deadline: Optional[datetime] = None

    @field_validator("name", "description", "status", mode="before")
    @classmethod
    def normalize_optional_strings(cls, value):
        return strip_optional(value)

    @model_validator(mode="after")
    def validate_dates(self):
        if self.start_date and self.deadline and as_utc(self.deadline) < as_utc(self.start_date):
            raise ValueError("Project deadline cannot be before start date")
        return self


# ---------- RESPONSE ----------
class ProjectOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    status: str
    start_date: Optional[datetime] = None
    deadline: Optional[datetime] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProjectDetailOut(ProjectOut):
    # caller's view of the project
    member_role: Optional[str] = None
    capabilities: List[str] = []


# ---------- MEMBERS ----------
class MemberCreate(BaseModel):
    user_id: int
    role: ProjectRoleEnum = ProjectRoleEnum.MEMBER


class MemberRoleUpdate(BaseModel):
    role: ProjectRoleEnum


class MemberOut(BaseModel):
    id: int
    project_id: int
    user_id: int
    role: str
    joined_at: Optional[datetime] = None
    user: Optional[UserOut] = None

    class Config:
        from_attributes = True


class MemberRoleOut(BaseModel):
    user_id: int
    project_id: int
    role: str


class MemberRoleResponse(BaseModel):
    message: str
    member: MemberRoleOut
