from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from launchpro.database.base import Base
from launchpro.utils.timeutils import utcnow


class Activity(Base):
    """Audit trail entry. Rows are only ever inserted.

    ``project_id`` and ``task_id`` are plain columns so the trail outlives
    the project and task it describes.
    """

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    project_id = Column(Integer, nullable=False, index=True)
    task_id = Column(Integer, nullable=True)

    action = Column(String(50), nullable=False)
    subject = Column(String(100), nullable=False)
    details = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    user = relationship("User", lazy="joined")
