import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError

from launchpro.core.dependencies import get_current_admin, get_current_user
from launchpro.core.errors import AuthorizationError, ConflictError, NotFoundError
from launchpro.core.security import hash_password
from launchpro.models.user import User
from launchpro.repositories.storage import Storage, get_storage
from launchpro.schemas.user import UserCreate, UserOut, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def _ensure_unique(storage: Storage, username: str | None, email: str | None, exclude_id: int | None = None):
    if username:
        existing = storage.users.get_by_username(username)
        if existing and existing.id != exclude_id:
            raise ConflictError("Username already exists")
    if email:
        existing = storage.users.get_by_email(email)
        if existing and existing.id != exclude_id:
            raise ConflictError("Email already in use")


@router.get("", response_model=List[UserOut])
def list_users(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return storage.users.list()


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserCreate,
    storage: Storage = Depends(get_storage),
    admin: User = Depends(get_current_admin),
):
    _ensure_unique(storage, data.username, data.email)

    try:
        user = storage.users.add(User(
            username=data.username,
            name=data.name,
            email=data.email.lower(),
            password_hash=hash_password(data.password),
            role=data.role,
            avatar=data.avatar,
        ))
        storage.commit()
    except IntegrityError:
        # a concurrent request took the username or email after the check
        storage.rollback()
        raise ConflictError("Username or email already in use")
    storage.refresh(user)
    logger.info("Admin %s created user %s", admin.id, user.id)
    return user


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    data: UserUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    # only admins can update other users
    if user_id != current_user.id and not current_user.is_admin:
        raise AuthorizationError("Permission denied")

    user = storage.users.get(user_id)
    if not user:
        raise NotFoundError("User not found")

    updates = data.model_dump(exclude_unset=True)
    if not current_user.is_admin:
        updates.pop("role", None)

    # required columns cannot be cleared
    for field in ("username", "name", "email", "password", "role"):
        if field in updates and updates[field] is None:
            updates.pop(field)

    _ensure_unique(storage, updates.get("username"), updates.get("email"), exclude_id=user.id)

    if "email" in updates:
        updates["email"] = updates["email"].lower()
    if "password" in updates:
        updates["password_hash"] = hash_password(updates.pop("password"))

    try:
        storage.users.update(user, updates)
        storage.commit()
    except IntegrityError:
        storage.rollback()
        raise ConflictError("Username or email already in use")
    storage.refresh(user)
    return user
