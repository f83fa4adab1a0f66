import logging
import os
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.exc import SQLAlchemyError

from launchpro.core.authz import Capability
from launchpro.core.dependencies import get_current_user
from launchpro.core.errors import InfrastructureError, NotFoundError
from launchpro.core.permissions import (
    ProjectAccess,
    ProjectContext,
    get_file_or_404,
    get_task_or_404,
    require,
)
from launchpro.core.validation import require_task_in_project
from launchpro.models.file import ProjectFile
from launchpro.models.user import User
from launchpro.repositories.storage import Storage, get_storage
from launchpro.schemas.common import MessageResponse
from launchpro.schemas.file import FileOut
from launchpro.services.activity_service import ActivityAction, record_activity
from launchpro.services.file_service import (
    discard_file,
    finish_removal,
    restore_file,
    stage_removal,
    store_upload,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Files"])


@router.get("/projects/{project_id}/files", response_model=List[FileOut])
def list_project_files(ctx: ProjectContext = Depends(ProjectAccess(Capability.FILE_VIEW))):
    return ctx.storage.files.list_for_project(ctx.project.id)


@router.get("/tasks/{task_id}/files", response_model=List[FileOut])
def list_task_files(
    task_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    task = get_task_or_404(storage, task_id)
    require(storage, current_user, Capability.FILE_VIEW, task.project_id)
    return storage.files.list_for_task(task.id)


@router.post("/projects/{project_id}/files", response_model=FileOut, status_code=status.HTTP_201_CREATED)
def upload_file(
    file: UploadFile = File(...),
    task_id: Optional[int] = Form(None),
    ctx: ProjectContext = Depends(ProjectAccess(Capability.FILE_UPLOAD)),
):
    storage, project_id = ctx.storage, ctx.project.id
    require_task_in_project(storage, task_id, project_id)

    path, size = store_upload(file, "projects", str(project_id))
    try:
        record = storage.files.add(ProjectFile(
            project_id=project_id,
            task_id=task_id,
            name=file.filename,
            path=path,
            mime_type=file.content_type,
            size=size,
            uploaded_by=ctx.user.id,
        ))
        storage.commit()
        storage.refresh(record)
    except SQLAlchemyError:
        storage.rollback()
        logger.exception("Could not save file record for %s", path)
        discard_file(path)
        raise InfrastructureError("Could not save file information")

    record_activity(
        storage,
        user_id=ctx.user.id,
        project_id=project_id,
        task_id=task_id,
        action=ActivityAction.ADDED,
        subject="a new file",
        details=record.name,
    )
    return record


@router.get("/files/{file_id}/download")
def download_file(
    file_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    record = get_file_or_404(storage, file_id)
    require(storage, current_user, Capability.FILE_VIEW, record.project_id)

    if not os.path.exists(record.path):
        raise NotFoundError("Stored file not found")

    return FileResponse(record.path, filename=record.name, media_type=record.mime_type)


@router.delete("/files/{file_id}", response_model=MessageResponse)
def delete_file(
    file_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    record = get_file_or_404(storage, file_id)
    require(storage, current_user, Capability.FILE_DELETE, record.project_id, owner_id=record.uploaded_by)
    project_id, task_id, name, path = record.project_id, record.task_id, record.name, record.path

    # the file is moved aside until the row is gone, and put back if the commit fails
    storage.files.delete(record)
    try:
        staged = stage_removal(path)
    except OSError:
        storage.rollback()
        logger.exception("Could not delete stored file %s", path)
        raise InfrastructureError("Could not delete file")

    try:
        storage.commit()
    except SQLAlchemyError:
        storage.rollback()
        logger.exception("Could not delete file record %s", file_id)
        restore_file(staged, path)
        raise InfrastructureError("Could not delete file")
    finish_removal(staged)

    record_activity(
        storage,
        user_id=current_user.id,
        project_id=project_id,
        task_id=task_id,
        action=ActivityAction.REMOVED,
        subject="a file",
        details=name,
    )
    return {"message": "File deleted successfully"}
