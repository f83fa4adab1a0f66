from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Any, Dict, Optional


def _normalize_name(value: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("Integration name is required")
    return cleaned


def _normalize_type(value: str) -> str:
    cleaned = value.strip().lower()
    if not cleaned:
        raise ValueError("Integration type is required")
    return cleaned


class IntegrationCreate(BaseModel):
    type: str
    name: str
    enabled: bool = False
    credentials: Dict[str, Any] = {}

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str):
        return _normalize_type(value)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str):
        return _normalize_name(value)


class IntegrationUpdate(BaseModel):
    type: Optional[str] = None
    name: Optional[str] = None
    enabled: Optional[bool] = None
    credentials: Optional[Dict[str, Any]] = None

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: Optional[str]):
        if value is None:
            return value
        return _normalize_type(value)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]):
        if value is None:
            return value
        return _normalize_name(value)


class IntegrationOut(BaseModel):
    id: int
    type: str
    name: str
    enabled: bool
    credentials: Dict[str, Any] = {}
    configured_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class IntegrationTestResult(BaseModel):
    message: str
    status: str
