from sqlalchemy import (
    Column, Integer, String, Text, Boolean, DateTime,
    ForeignKey,
)
from sqlalchemy.orm import relationship
import enum

from launchpro.database.base import Base
from launchpro.utils.timeutils import utcnow


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(50), default=TaskStatus.PENDING.value, nullable=False)
    priority = Column(String(20), default=TaskPriority.MEDIUM.value, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=True)
    due_date = Column(DateTime(timezone=True), nullable=True)

    # Relations
    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    phase_id = Column(
        Integer,
        ForeignKey("phases.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    assigned_to = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True
    )
    created_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True
    )
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    project = relationship("Project", back_populates="tasks")
    phase = relationship("Phase", back_populates="tasks")
    assigned_user = relationship("User", foreign_keys=[assigned_to])
    created_user = relationship("User", foreign_keys=[created_by])
    checklist_items = relationship(
        "ChecklistItem",
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="ChecklistItem.position",
    )
    # files and comments of a deleted task stay on the project
    files = relationship("ProjectFile", back_populates="task")
    comments = relationship("Comment", back_populates="task")

    @property
    def assignee_name(self):
        return self.assigned_user.name if self.assigned_user else None


class ChecklistItem(Base):
    __tablename__ = "checklist_items"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(
        Integer,
        ForeignKey("tasks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content = Column(String(500), nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    position = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    task = relationship("Task", back_populates="checklist_items")
