import logging
from typing import List

from fastapi import APIRouter, Depends, status

from launchpro.core.authz import Capability, effective_capabilities
from launchpro.core.dependencies import get_current_user
from launchpro.core.errors import ValidationError, field_error
from launchpro.core.locks import project_membership_locks
from launchpro.core.permissions import ProjectAccess, ProjectContext
from launchpro.models.project import Project, ProjectMember, ProjectRole
from launchpro.models.user import User
from launchpro.repositories.storage import Storage, get_storage
from launchpro.schemas.common import MessageResponse
from launchpro.schemas.project import ProjectCreate, ProjectDetailOut, ProjectOut, ProjectUpdate
from launchpro.services.activity_service import ActivityAction, record_activity
from launchpro.services.file_service import discard_file
from launchpro.utils.timeutils import as_utc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["Projects"])


def serialize_project(ctx: ProjectContext) -> dict:
    payload = ProjectOut.model_validate(ctx.project).model_dump()
    payload["member_role"] = ctx.scope.member_role
    payload["capabilities"] = sorted(effective_capabilities(ctx.user, ctx.scope))
    return payload


@router.get("", response_model=List[ProjectOut])
def list_projects(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    if current_user.is_admin:
        return storage.projects.list()
    return storage.projects.list_for_user(current_user.id)


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    data: ProjectCreate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    project = storage.projects.add(Project(
        name=data.name,
        description=data.description,
        status=data.status or "active",
        start_date=data.start_date,
        deadline=data.deadline,
        created_by=current_user.id,
    ))
    # the creator is the project's first admin
    storage.members.add(ProjectMember(
        project_id=project.id,
        user_id=current_user.id,
        role=ProjectRole.ADMIN,
    ))
    storage.commit()
    storage.refresh(project)

    record_activity(
        storage,
        user_id=current_user.id,
        project_id=project.id,
        action=ActivityAction.CREATED,
        subject="a new project",
        details=project.name,
    )
    return project


@router.get("/{project_id}", response_model=ProjectDetailOut)
def get_project(ctx: ProjectContext = Depends(ProjectAccess(Capability.PROJECT_VIEW))):
    return serialize_project(ctx)


@router.put("/{project_id}", response_model=ProjectOut)
def update_project(
    data: ProjectUpdate,
    ctx: ProjectContext = Depends(ProjectAccess(Capability.PROJECT_UPDATE)),
):
    storage, project = ctx.storage, ctx.project

    updates = data.model_dump(exclude_unset=True)
    for field in ("name", "status"):
        if field in updates and updates[field] is None:
            updates.pop(field)

    # a single date in the payload is checked against the stored other one
    start_date = updates.get("start_date", project.start_date)
    deadline = updates.get("deadline", project.deadline)
    if start_date and deadline and as_utc(deadline) < as_utc(start_date):
        message = "Project deadline cannot be before start date"
        raise ValidationError(message, errors=[field_error("deadline", message)])

    storage.projects.update(project, updates)
    storage.commit()
    storage.refresh(project)

    record_activity(
        storage,
        user_id=ctx.user.id,
        project_id=project.id,
        action=ActivityAction.UPDATED,
        subject="project details",
        details=project.name,
    )
    return project


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(ctx: ProjectContext = Depends(ProjectAccess(Capability.PROJECT_DELETE))):
    storage, project = ctx.storage, ctx.project
    project_id, project_name = project.id, project.name
    stored_paths = [record.path for record in project.files]

    # members, phases, tasks, files and comments go with the project; activities stay
    storage.projects.delete(project)
    storage.commit()
    project_membership_locks.discard(project_id)

    for path in stored_paths:
        discard_file(path)

    record_activity(
        storage,
        user_id=ctx.user.id,
        project_id=project_id,
        action=ActivityAction.REMOVED,
        subject="a project",
        details=project_name,
    )
    logger.info("User %s deleted project %s", ctx.user.id, project_id)
    return {"message": "Project deleted successfully"}
