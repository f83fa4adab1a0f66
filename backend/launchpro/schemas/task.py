from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional
from enum import Enum

from launchpro.schemas.common import strip_optional


class TaskStatusEnum(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriorityEnum(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ---------- CREATE ----------
class TaskCreate(BaseModel):
    name: str
    description: Optional[str] = None
    phase_id: Optional[int] = None
    assigned_to: Optional[int] = None
    status: TaskStatusEnum = TaskStatusEnum.PENDING
    priority: TaskPriorityEnum = TaskPriorityEnum.MEDIUM
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Task name is required")
        return cleaned


# ---------- UPDATE ----------
class TaskUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    phase_id: Optional[int] = None
    assigned_to: Optional[int] = None
    status: Optional[TaskStatusEnum] = None
    priority: Optional[TaskPriorityEnum] = None
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def normalize_optional_strings(cls, value):
        return strip_optional(value)


class TaskOut(BaseModel):
    id: int
    project_id: int
    phase_id: Optional[int] = None
    name: str
    description: Optional[str] = None
    status: str
    priority: str
    assigned_to: Optional[int] = None
    assignee_name: Optional[str] = None
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ---------- CHECKLIST ----------
class ChecklistItemCreate(BaseModel):
    content: str
    completed: bool = False
    position: int = 0

    @field_validator("content")
    @classmethod
    def validate_content(cls, value: str):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Checklist item content is required")
        return cleaned


class ChecklistItemUpdate(BaseModel):
    content: Optional[str] = None
    completed: Optional[bool] = None
    position: Optional[int] = None

    @field_validator("content", mode="before")
    @classmethod
    def normalize_optional_strings(cls, value):
        return strip_optional(value)


class ChecklistItemOut(BaseModel):
    id: int
    task_id: int
    content: str
    completed: bool
    position: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
