import logging

from launchpro.config import settings
from launchpro.core.logging_setup import setup_logging
from launchpro.core.security import hash_password
from launchpro.database.base import Base
from launchpro.database.session import SessionLocal, engine
from launchpro.main import app  # noqa: F401  registers every model
from launchpro.models.user import GlobalRole, User
from launchpro.repositories.storage import Storage

logger = logging.getLogger("launchpro.scripts.create_admin")


def create_admin() -> bool:
    """Create the first global admin from settings; returns False when one exists."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        storage = Storage(db)
        existing_admin = db.query(User).filter(User.role == GlobalRole.ADMIN).first()
        if existing_admin:
            logger.info("Admin already exists (%s)", existing_admin.username)
            return False

        storage.users.add(User(
            username=settings.ADMIN_USERNAME,
            name=settings.ADMIN_NAME,
            email=settings.ADMIN_EMAIL,
            password_hash=hash_password(settings.ADMIN_PASSWORD),
            role=GlobalRole.ADMIN,
        ))
        storage.commit()
        logger.info("Admin %s created successfully", settings.ADMIN_USERNAME)
        return True
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    create_admin()
