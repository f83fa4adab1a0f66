from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from launchpro.database.base import Base
from launchpro.utils.timeutils import utcnow


class ProjectFile(Base):
    __tablename__ = "files"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True)

    name = Column(String(255), nullable=False)       # original filename
    path = Column(String(500), nullable=False)       # location on disk
    mime_type = Column(String(255), nullable=True)
    size = Column(Integer, nullable=False, default=0)

    uploaded_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    project = relationship("Project", back_populates="files")
    task = relationship("Task", back_populates="files")
    uploader = relationship("User")
