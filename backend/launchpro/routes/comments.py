from typing import List

from fastapi import APIRouter, Depends, status

from launchpro.core.authz import Capability
from launchpro.core.dependencies import get_current_user
from launchpro.core.permissions import (
    ProjectAccess,
    ProjectContext,
    get_comment_or_404,
    get_task_or_404,
    require,
)
from launchpro.core.validation import require_task_in_project
from launchpro.models.comment import Comment
from launchpro.models.user import User
from launchpro.repositories.storage import Storage, get_storage
from launchpro.schemas.comment import CommentCreate, CommentOut
from launchpro.schemas.common import MessageResponse
from launchpro.services.activity_service import ActivityAction, record_activity

router = APIRouter(tags=["Comments"])


@router.get("/projects/{project_id}/comments", response_model=List[CommentOut])
def list_project_comments(ctx: ProjectContext = Depends(ProjectAccess(Capability.COMMENT_VIEW))):
    return ctx.storage.comments.list_for_project(ctx.project.id)


@router.get("/tasks/{task_id}/comments", response_model=List[CommentOut])
def list_task_comments(
    task_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    task = get_task_or_404(storage, task_id)
    require(storage, current_user, Capability.COMMENT_VIEW, task.project_id)
    return storage.comments.list_for_task(task.id)


@router.post("/projects/{project_id}/comments", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def create_comment(
    data: CommentCreate,
    ctx: ProjectContext = Depends(ProjectAccess(Capability.COMMENT_CREATE)),
):
    storage, project_id = ctx.storage, ctx.project.id
    require_task_in_project(storage, data.task_id, project_id)

    comment = storage.comments.add(Comment(
        project_id=project_id,
        task_id=data.task_id,
        user_id=ctx.user.id,
        content=data.content,
    ))
    storage.commit()
    storage.refresh(comment)

    record_activity(
        storage,
        user_id=ctx.user.id,
        project_id=project_id,
        task_id=data.task_id,
        action=ActivityAction.ADDED,
        subject="a comment",
        details=comment.content,
    )
    return comment


@router.delete("/comments/{comment_id}", response_model=MessageResponse)
def delete_comment(
    comment_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    comment = get_comment_or_404(storage, comment_id)
    require(storage, current_user, Capability.COMMENT_DELETE, comment.project_id, owner_id=comment.user_id)
    project_id, task_id, content = comment.project_id, comment.task_id, comment.content

    storage.comments.delete(comment)
    storage.commit()

    record_activity(
        storage,
        user_id=current_user.id,
        project_id=project_id,
        task_id=task_id,
        action=ActivityAction.REMOVED,
        subject="a comment",
        details=content,
    )
    return {"message": "Comment deleted successfully"}
