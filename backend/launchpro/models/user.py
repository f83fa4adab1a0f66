from sqlalchemy import Column, Integer, String, DateTime

from launchpro.database.base import Base
from launchpro.utils.timeutils import utcnow


class GlobalRole:
    ADMIN = "admin"
    USER = "user"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    username = Column(String(64), unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)

    password_hash = Column(String, nullable=False)

    role = Column(String(20), nullable=False, default=GlobalRole.USER)  # admin | user

    avatar = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == GlobalRole.ADMIN
