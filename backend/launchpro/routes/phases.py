from typing import List

from fastapi import APIRouter, Depends, status

from launchpro.core.authz import Capability
from launchpro.core.dependencies import get_current_user
from launchpro.core.permissions import ProjectAccess, ProjectContext, get_phase_or_404, require
from launchpro.models.phase import Phase
from launchpro.models.user import User
from launchpro.repositories.storage import Storage, get_storage
from launchpro.schemas.common import MessageResponse
from launchpro.schemas.phase import PhaseCreate, PhaseOut, PhaseUpdate
from launchpro.schemas.task import TaskOut
from launchpro.services.activity_service import ActivityAction, record_activity

router = APIRouter(tags=["Phases"])


@router.get("/projects/{project_id}/phases", response_model=List[PhaseOut])
def list_phases(ctx: ProjectContext = Depends(ProjectAccess(Capability.PHASE_VIEW))):
    return ctx.storage.phases.list_for_project(ctx.project.id)


@router.post("/projects/{project_id}/phases", response_model=PhaseOut, status_code=status.HTTP_201_CREATED)
def create_phase(
    data: PhaseCreate,
    ctx: ProjectContext = Depends(ProjectAccess(Capability.PHASE_MANAGE)),
):
    storage = ctx.storage
    phase = storage.phases.add(Phase(project_id=ctx.project.id, **data.model_dump()))
    storage.commit()
    storage.refresh(phase)

    record_activity(
        storage,
        user_id=ctx.user.id,
        project_id=phase.project_id,
        action=ActivityAction.CREATED,
        subject="a new phase",
        details=phase.name,
    )
    return phase


@router.put("/phases/{phase_id}", response_model=PhaseOut)
def update_phase(
    phase_id: int,
    data: PhaseUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    phase = get_phase_or_404(storage, phase_id)
    require(storage, current_user, Capability.PHASE_MANAGE, phase.project_id)

    updates = data.model_dump(exclude_unset=True)
    for field in ("name", "position"):
        if field in updates and updates[field] is None:
            updates.pop(field)

    storage.phases.update(phase, updates)
    storage.commit()
    storage.refresh(phase)

    record_activity(
        storage,
        user_id=current_user.id,
        project_id=phase.project_id,
        action=ActivityAction.UPDATED,
        subject="a phase",
        details=phase.name,
    )
    return phase


@router.delete("/phases/{phase_id}", response_model=MessageResponse)
def delete_phase(
    phase_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    phase = get_phase_or_404(storage, phase_id)
    require(storage, current_user, Capability.PHASE_MANAGE, phase.project_id)
    project_id, phase_name = phase.project_id, phase.name

    storage.phases.delete(phase)
    storage.commit()

    record_activity(
        storage,
        user_id=current_user.id,
        project_id=project_id,
        action=ActivityAction.REMOVED,
        subject="a phase",
        details=phase_name,
    )
    return {"message": "Phase deleted successfully"}


@router.get("/phases/{phase_id}/tasks", response_model=List[TaskOut])
def list_phase_tasks(
    phase_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    phase = get_phase_or_404(storage, phase_id)
    require(storage, current_user, Capability.TASK_VIEW, phase.project_id)
    return storage.tasks.list_for_phase(phase.id)
