from typing import List

from fastapi import APIRouter, Depends, status

from launchpro.core.authz import Capability
from launchpro.core.dependencies import get_current_user
from launchpro.core.permissions import get_checklist_item_or_404, get_task_or_404, require
from launchpro.models.task import ChecklistItem
from launchpro.models.user import User
from launchpro.repositories.storage import Storage, get_storage
from launchpro.schemas.common import MessageResponse
from launchpro.schemas.task import ChecklistItemCreate, ChecklistItemOut, ChecklistItemUpdate

router = APIRouter(tags=["Checklist"])


def _authorize_item(storage: Storage, user: User, item_id: int, capability: str) -> ChecklistItem:
    item = get_checklist_item_or_404(storage, item_id)
    task = get_task_or_404(storage, item.task_id)
    require(storage, user, capability, task.project_id)
    return item


@router.get("/tasks/{task_id}/checklist", response_model=List[ChecklistItemOut])
def list_checklist(
    task_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    task = get_task_or_404(storage, task_id)
    require(storage, current_user, Capability.CHECKLIST_VIEW, task.project_id)
    return storage.checklist.list_for_task(task.id)


@router.post("/tasks/{task_id}/checklist", response_model=ChecklistItemOut, status_code=status.HTTP_201_CREATED)
def create_checklist_item(
    task_id: int,
    data: ChecklistItemCreate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    task = get_task_or_404(storage, task_id)
    require(storage, current_user, Capability.CHECKLIST_MANAGE, task.project_id)

    item = storage.checklist.add(ChecklistItem(task_id=task.id, **data.model_dump()))
    storage.commit()
    storage.refresh(item)
    return item


@router.put("/checklist/{item_id}", response_model=ChecklistItemOut)
def update_checklist_item(
    item_id: int,
    data: ChecklistItemUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    item = _authorize_item(storage, current_user, item_id, Capability.CHECKLIST_MANAGE)

    updates = {key: value for key, value in data.model_dump(exclude_unset=True).items() if value is not None}
    storage.checklist.update(item, updates)
    storage.commit()
    storage.refresh(item)
    return item


@router.delete("/checklist/{item_id}", response_model=MessageResponse)
def delete_checklist_item(
    item_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    item = _authorize_item(storage, current_user, item_id, Capability.CHECKLIST_MANAGE)

    storage.checklist.delete(item)
    storage.commit()
    return {"message": "Checklist item deleted successfully"}
