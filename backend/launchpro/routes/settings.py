import logging
import os

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError

from launchpro.core.dependencies import get_current_admin
from launchpro.core.errors import InfrastructureError
from launchpro.models.user import User
from launchpro.repositories.storage import Storage, get_storage
from launchpro.schemas.settings import LogoUploadResponse, SettingsOut, SettingsUpdate
from launchpro.services.file_service import IMAGE_TYPES, discard_file, store_upload
from launchpro.services.settings_service import current_settings, update_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", response_model=SettingsOut)
def get_settings(storage: Storage = Depends(get_storage)):
    return current_settings(storage)


@router.put("", response_model=SettingsOut)
def put_settings(
    data: SettingsUpdate,
    storage: Storage = Depends(get_storage),
    admin: User = Depends(get_current_admin),
):
    theme = data.theme.model_dump(exclude_none=True) if data.theme else None
    organization = data.organization.model_dump(exclude_unset=True) if data.organization else None
    return update_settings(storage, admin.id, theme=theme, organization=organization)


@router.post("/logo", response_model=LogoUploadResponse, status_code=status.HTTP_201_CREATED)
def upload_logo(
    logo: UploadFile = File(...),
    storage: Storage = Depends(get_storage),
    admin: User = Depends(get_current_admin),
):
    path, _ = store_upload(logo, "logos", field_name="logo", allowed_types=IMAGE_TYPES, prefix="logo")
    url = f"/uploads/logos/{os.path.basename(path)}"
    try:
        update_settings(storage, admin.id, organization={"logo": url})
    except SQLAlchemyError:
        storage.rollback()
        logger.exception("Could not save logo %s", path)
        discard_file(path)
        raise InfrastructureError("Could not save logo")
    return {"logo": url}
