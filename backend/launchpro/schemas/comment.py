from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional

from launchpro.schemas.user import UserOut


class CommentCreate(BaseModel):
    content: str
    task_id: Optional[int] = None

    @field_validator("content")
    @classmethod
    def validate_content(cls, value: str):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Content is required")
        return cleaned


class CommentOut(BaseModel):
    id: int
    project_id: int
    task_id: Optional[int] = None
    user_id: int
    content: str
    created_at: Optional[datetime] = None
    user: Optional[UserOut] = None

    model_config = {
        "from_attributes": True
    }
