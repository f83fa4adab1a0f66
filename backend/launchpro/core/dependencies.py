import logging

from fastapi import Depends
from fastapi.security import APIKeyCookie

from launchpro.config import settings
from launchpro.core.errors import AuthenticationError, AuthorizationError
from launchpro.core.security import decode_token
from launchpro.models.user import User
from launchpro.repositories.storage import Storage, get_storage
from launchpro.utils.timeutils import as_utc, utcnow

logger = logging.getLogger(__name__)

session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


def get_current_user(
    storage: Storage = Depends(get_storage),
    token: str | None = Depends(session_cookie),
) -> User:
    if not token:
        raise AuthenticationError("Not authenticated")

    payload = decode_token(token)
    if payload is None:
        raise AuthenticationError("Invalid or expired session")

    sub = payload.get("sub")
    session_id = payload.get("sid")
    if sub is None or not session_id:
        raise AuthenticationError("Invalid session payload")

    try:
        user_id = int(sub)
    except ValueError:
        raise AuthenticationError("Invalid session subject")

    user = storage.users.get(user_id)
    if not user:
        raise AuthenticationError("User not found")

    now = utcnow()
    session = storage.sessions.get_active(session_id, user_id)
    if not session or as_utc(session.expires_at) < now:
        raise AuthenticationError("Session expired")

    session.last_seen_at = now
    storage.commit()

    return user


def get_current_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    if not current_user.is_admin:
        logger.info("Admin access denied for user %s", current_user.id)
        raise AuthorizationError("Admin access required")
    return current_user
