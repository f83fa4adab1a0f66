import logging

from fastapi import APIRouter, Depends, Response

from launchpro.config import settings
from launchpro.core.dependencies import get_current_user, session_cookie
from launchpro.core.errors import AuthenticationError
from launchpro.core.security import (
    create_session_token,
    decode_token,
    session_lifetime,
    verify_password,
)
from launchpro.models.user import User
from launchpro.models.user_session import UserSession
from launchpro.repositories.storage import Storage, get_storage
from launchpro.schemas.common import MessageResponse
from launchpro.schemas.user import LoginRequest, UserOut
from launchpro.utils.generator import generate_session_id
from launchpro.utils.timeutils import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _create_user_session(storage: Storage, user: User) -> UserSession:
    now = utcnow()
    session = storage.sessions.add(UserSession(
        session_id=generate_session_id(),
        user_id=user.id,
        last_seen_at=now,
        expires_at=now + session_lifetime(),
    ))
    storage.commit()
    return session


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(session_lifetime().total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


@router.post("/login", response_model=UserOut)
def login(data: LoginRequest, response: Response, storage: Storage = Depends(get_storage)):
    user = storage.users.get_by_username(data.username)

    if not user or not verify_password(data.password, user.password_hash):
        logger.info("Failed login for username %r", data.username)
        raise AuthenticationError("Invalid credentials")

    session = _create_user_session(storage, user)
    _set_session_cookie(response, create_session_token(user.id, session.session_id))
    logger.info("User %s logged in", user.id)
    return user


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    storage: Storage = Depends(get_storage),
    token: str | None = Depends(session_cookie),
):
    payload = decode_token(token) if token else None
    if payload and payload.get("sid") and payload.get("sub"):
        try:
            user_id = int(payload["sub"])
        except ValueError:
            user_id = None
        session = storage.sessions.get_active(payload["sid"], user_id) if user_id else None
        if session:
            session.revoked_at = utcnow()
            storage.commit()
            logger.info("User %s logged out", user_id)

    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user
