from typing import List, Optional

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class ValidationErrorDetail(BaseModel):
    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    message: str
    errors: Optional[List[ValidationErrorDetail]] = None


def strip_optional(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value
