from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import Literal, Optional
import re

from launchpro.schemas.common import strip_optional

USERNAME_REGEX = re.compile(r"^[A-Za-z0-9_.-]{3,64}$")

GlobalRoleLiteral = Literal["admin", "user"]


class LoginRequest(BaseModel):
    username: str
    password: str

    @field_validator("username", "password")
    @classmethod
    def validate_present(cls, value: str):
        if not value or not value.strip():
            raise ValueError("Username and password are required")
        return value


class UserOut(BaseModel):
    """Public view of a user. The password hash has no field here."""
    id: int
    username: str
    name: str
    email: EmailStr
    role: str
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class UserCreate(BaseModel):
    username: str
    name: str
    email: EmailStr
    password: str = Field(min_length=6)
    role: GlobalRoleLiteral = "user"
    avatar: Optional[str] = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str):
        value = value.strip()
        if not USERNAME_REGEX.fullmatch(value):
            raise ValueError("Username must be 3 to 64 letters, digits, '.', '_' or '-'")
        return value

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Name is required")
        return cleaned


# ---------------- PROFILE UPDATE ----------------

class UserUpdate(BaseModel):
    username: Optional[str] = None
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    role: Optional[GlobalRoleLiteral] = None
    avatar: Optional[str] = None

    @field_validator("username", "name", "avatar", mode="before")
    @classmethod
    def normalize_optional_strings(cls, value):
        return strip_optional(value)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: Optional[str]):
        if value is None:
            return value
        if not USERNAME_REGEX.fullmatch(value):
            raise ValueError("Username must be 3 to 64 letters, digits, '.', '_' or '-'")
        return value
