from typing import List

from fastapi import APIRouter, Depends, status

from launchpro.core.authz import Capability
from launchpro.core.dependencies import get_current_user
from launchpro.core.permissions import ProjectAccess, ProjectContext, get_task_or_404, require
from launchpro.core.validation import require_phase_in_project, require_project_member
from launchpro.models.task import Task
from launchpro.models.user import User
from launchpro.repositories.storage import Storage, get_storage
from launchpro.schemas.common import MessageResponse
from launchpro.schemas.task import TaskCreate, TaskOut, TaskUpdate
from launchpro.services.activity_service import ActivityAction, record_activity

router = APIRouter(tags=["Tasks"])


# =====================================
# PROJECT TASKS
# =====================================
@router.get("/projects/{project_id}/tasks", response_model=List[TaskOut])
def list_project_tasks(ctx: ProjectContext = Depends(ProjectAccess(Capability.TASK_VIEW))):
    return ctx.storage.tasks.list_for_project(ctx.project.id)


@router.post("/projects/{project_id}/tasks", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    ctx: ProjectContext = Depends(ProjectAccess(Capability.TASK_CREATE)),
):
    storage, project_id = ctx.storage, ctx.project.id

    require_phase_in_project(storage, payload.phase_id, project_id)
    require_project_member(storage, payload.assigned_to, project_id)

    task = storage.tasks.add(Task(
        project_id=project_id,
        phase_id=payload.phase_id,
        name=payload.name,
        description=payload.description,
        status=payload.status.value,
        priority=payload.priority.value,
        assigned_to=payload.assigned_to,
        start_date=payload.start_date,
        due_date=payload.due_date,
        created_by=ctx.user.id,
    ))
    storage.commit()
    storage.refresh(task)

    record_activity(
        storage,
        user_id=ctx.user.id,
        project_id=project_id,
        task_id=task.id,
        action=ActivityAction.CREATED,
        subject="a new task",
        details=task.name,
    )
    return task


# =====================================
# MY TASKS
# =====================================
@router.get("/tasks", response_model=List[TaskOut])
def list_my_visible_tasks(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """Tasks assigned to me plus every task of the projects I belong to."""
    project_ids = storage.members.project_ids_for_user(current_user.id)
    return storage.tasks.list_visible_to(current_user.id, project_ids)


@router.get("/tasks/user/me", response_model=List[TaskOut])
def list_assigned_tasks(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return storage.tasks.list_assigned_to(current_user.id)


# =====================================
# SINGLE TASK
# =====================================
@router.get("/tasks/{task_id}", response_model=TaskOut)
def get_task(
    task_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    task = get_task_or_404(storage, task_id)
    require(storage, current_user, Capability.TASK_VIEW, task.project_id)
    return task


@router.put("/tasks/{task_id}", response_model=TaskOut)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    task = get_task_or_404(storage, task_id)
    require(storage, current_user, Capability.TASK_UPDATE, task.project_id)

    updates = payload.model_dump(exclude_unset=True)
    for field in ("name", "status", "priority"):
        if field in updates and updates[field] is None:
            updates.pop(field)
    for field in ("status", "priority"):
        if field in updates:
            updates[field] = updates[field].value

    if "phase_id" in updates:
        require_phase_in_project(storage, updates["phase_id"], task.project_id)
    if "assigned_to" in updates:
        require_project_member(storage, updates["assigned_to"], task.project_id)

    storage.tasks.update(task, updates)
    storage.commit()
    storage.refresh(task)

    record_activity(
        storage,
        user_id=current_user.id,
        project_id=task.project_id,
        task_id=task.id,
        action=ActivityAction.UPDATED,
        subject="a task",
        details=task.name,
    )
    return task


@router.delete("/tasks/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    task = get_task_or_404(storage, task_id)
    require(storage, current_user, Capability.TASK_DELETE, task.project_id)
    project_id, task_name = task.project_id, task.name

    storage.tasks.delete(task)
    storage.commit()

    record_activity(
        storage,
        user_id=current_user.id,
        project_id=project_id,
        task_id=task_id,
        action=ActivityAction.REMOVED,
        subject="a task",
        details=task_name,
    )
    return {"message": "Task deleted successfully"}
