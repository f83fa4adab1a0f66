from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional

from launchpro.schemas.common import strip_optional


class PhaseCreate(BaseModel):
    name: str
    description: Optional[str] = None
    position: int = 0
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Phase name is required")
        return cleaned


class PhaseUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    position: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def normalize_optional_strings(cls, value):
        return strip_optional(value)


class PhaseOut(BaseModel):
    id: int
    project_id: int
    name: str
    description: Optional[str] = None
    position: int = 0
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
