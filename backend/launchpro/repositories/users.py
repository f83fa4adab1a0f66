from typing import Optional

from sqlalchemy import func

from launchpro.models.user import User
from launchpro.models.user_session import UserSession
from launchpro.repositories.base import Repository


class UserRepository(Repository[User]):
    model = User

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.username) == username.strip().lower()).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()


class SessionRepository(Repository[UserSession]):
    model = UserSession

    def get_active(self, session_id: str, user_id: int) -> Optional[UserSession]:
        return self.db.query(UserSession).filter(
            UserSession.session_id == session_id,
            UserSession.user_id == user_id,
            UserSession.revoked_at == None,  # noqa: E711
        ).first()
