import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError

from launchpro.core.dependencies import get_current_admin
from launchpro.core.errors import NotFoundError
from launchpro.models.integration import Integration
from launchpro.models.user import User
from launchpro.repositories.storage import Storage, get_storage
from launchpro.schemas.common import MessageResponse
from launchpro.schemas.integration import (
    IntegrationCreate,
    IntegrationOut,
    IntegrationTestResult,
    IntegrationUpdate,
)
from launchpro.services.integration_service import ensure_type_available, type_taken, verify_integration

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/integrations", tags=["Integrations"])


def _get_integration_or_404(storage: Storage, integration_id: int) -> Integration:
    integration = storage.integrations.get(integration_id)
    if not integration:
        raise NotFoundError("Integration not found")
    return integration


@router.get("", response_model=List[IntegrationOut])
def list_integrations(
    storage: Storage = Depends(get_storage),
    admin: User = Depends(get_current_admin),
):
    return storage.integrations.list()


@router.get("/{integration_id}", response_model=IntegrationOut)
def get_integration(
    integration_id: int,
    storage: Storage = Depends(get_storage),
    admin: User = Depends(get_current_admin),
):
    return _get_integration_or_404(storage, integration_id)


@router.post("", response_model=IntegrationOut, status_code=status.HTTP_201_CREATED)
def create_integration(
    data: IntegrationCreate,
    storage: Storage = Depends(get_storage),
    admin: User = Depends(get_current_admin),
):
    ensure_type_available(storage, data.type)

    try:
        integration = storage.integrations.add(Integration(
            type=data.type,
            name=data.name,
            enabled=data.enabled,
            credentials=data.credentials,
            configured_by=admin.id,
        ))
        storage.commit()
    except IntegrityError:
        # another request configured the same type after the check
        storage.rollback()
        raise type_taken(data.type)
    storage.refresh(integration)
    logger.info("Admin %s configured integration %s", admin.id, integration.type)
    return integration


@router.put("/{integration_id}", response_model=IntegrationOut)
def update_integration(
    integration_id: int,
    data: IntegrationUpdate,
    storage: Storage = Depends(get_storage),
    admin: User = Depends(get_current_admin),
):
    integration = _get_integration_or_404(storage, integration_id)

    updates = {key: value for key, value in data.model_dump(exclude_unset=True).items() if value is not None}
    if "type" in updates and updates["type"] != integration.type:
        ensure_type_available(storage, updates["type"], exclude_id=integration.id)
    updates["configured_by"] = admin.id

    try:
        storage.integrations.update(integration, updates)
        storage.commit()
    except IntegrityError:
        storage.rollback()
        raise type_taken(updates.get("type", integration.type))
    storage.refresh(integration)
    return integration


@router.delete("/{integration_id}", response_model=MessageResponse)
def delete_integration(
    integration_id: int,
    storage: Storage = Depends(get_storage),
    admin: User = Depends(get_current_admin),
):
    integration = _get_integration_or_404(storage, integration_id)
    storage.integrations.delete(integration)
    storage.commit()
    return {"message": "Integration deleted successfully"}


@router.post("/{integration_type}/test", response_model=IntegrationTestResult)
def test_integration(
    integration_type: str,
    storage: Storage = Depends(get_storage),
    admin: User = Depends(get_current_admin),
):
    return verify_integration(storage, integration_type.strip().lower())
