from typing import List

from fastapi import APIRouter, Depends, status

from launchpro.core.authz import Capability
from launchpro.core.errors import NotFoundError
from launchpro.core.permissions import ProjectAccess, ProjectContext
from launchpro.schemas.common import MessageResponse
from launchpro.schemas.project import MemberCreate, MemberOut, MemberRoleResponse, MemberRoleUpdate
from launchpro.services import membership_service
from launchpro.services.activity_service import ActivityAction, record_activity

router = APIRouter(prefix="/projects/{project_id}/members", tags=["Project members"])


@router.get("", response_model=List[MemberOut])
def list_members(ctx: ProjectContext = Depends(ProjectAccess(Capability.MEMBER_VIEW))):
    return ctx.storage.members.list_for_project(ctx.project.id)


@router.post("", response_model=MemberOut, status_code=status.HTTP_201_CREATED)
def add_member(
    data: MemberCreate,
    ctx: ProjectContext = Depends(ProjectAccess(Capability.MEMBER_MANAGE)),
):
    storage, project_id = ctx.storage, ctx.project.id

    user = storage.users.get(data.user_id)
    if not user:
        raise NotFoundError("User not found")

    member = membership_service.add_member(storage, project_id, user.id, data.role.value)

    record_activity(
        storage,
        user_id=ctx.user.id,
        project_id=project_id,
        action=ActivityAction.ADDED,
        subject="a new member",
        details=f"{user.name} as {data.role.value}",
    )
    return member


@router.delete("/{user_id}", response_model=MessageResponse)
def remove_member(
    user_id: int,
    ctx: ProjectContext = Depends(ProjectAccess(Capability.MEMBER_MANAGE)),
):
    storage, project_id = ctx.storage, ctx.project.id

    membership_service.remove_member(storage, project_id, user_id)

    user = storage.users.get(user_id)
    record_activity(
        storage,
        user_id=ctx.user.id,
        project_id=project_id,
        action=ActivityAction.REMOVED,
        subject="a member",
        details=user.name if user else f"ID: {user_id}",
    )
    return {"message": "Member removed successfully"}


@router.put("/{user_id}/role", response_model=MemberRoleResponse)
def update_member_role(
    user_id: int,
    data: MemberRoleUpdate,
    ctx: ProjectContext = Depends(ProjectAccess(Capability.MEMBER_SET_ROLE)),
):
    storage, project_id = ctx.storage, ctx.project.id
    role = data.role.value

    user = storage.users.get(user_id)
    if not user:
        raise NotFoundError("User not found")

    membership_service.change_member_role(storage, project_id, user_id, role)

    record_activity(
        storage,
        user_id=ctx.user.id,
        project_id=project_id,
        action=ActivityAction.UPDATED,
        subject="member role",
        details=f"{user.name} to {role}",
    )
    return {
        "message": "Member role updated successfully",
        "member": {"user_id": user_id, "project_id": project_id, "role": role},
    }
