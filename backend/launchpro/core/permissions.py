"""
Request-side glue for the authorization policy.

Handlers resolve the resource first (404 when any link is missing), then
call ``require`` which turns a denied ``Verdict`` into a 403.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends

from launchpro.core.authz import ProjectScope, authorize
from launchpro.core.dependencies import get_current_user
from launchpro.core.errors import AuthorizationError, NotFoundError
from launchpro.models.comment import Comment
from launchpro.models.file import ProjectFile
from launchpro.models.phase import Phase
from launchpro.models.project import Project
from launchpro.models.task import ChecklistItem, Task
from launchpro.models.user import User
from launchpro.repositories.storage import Storage, get_storage

logger = logging.getLogger(__name__)


def project_scope(storage: Storage, user: User, project_id: int, owner_id: Optional[int] = None) -> ProjectScope:
    membership = storage.members.get_membership(project_id, user.id)
    return ProjectScope(
        project_id=project_id,
        member_role=membership.role if membership else None,
        owner_id=owner_id,
    )


def require(
    storage: Storage,
    user: User,
    capability: str,
    project_id: int,
    owner_id: Optional[int] = None,
) -> ProjectScope:
    scope = project_scope(storage, user, project_id, owner_id)
    verdict = authorize(user, capability, scope)
    if not verdict:
        logger.info("Denied %s to user %s: %s", capability, user.id, verdict.reason)
        raise AuthorizationError("Permission denied")
    return scope


# ---------------- resolvers ----------------

def get_project_or_404(storage: Storage, project_id: int) -> Project:
    project = storage.projects.get(project_id)
    if not project:
        raise NotFoundError("Project not found")
    return project


def get_phase_or_404(storage: Storage, phase_id: int) -> Phase:
    phase = storage.phases.get(phase_id)
    if not phase:
        raise NotFoundError("Phase not found")
    return phase


def get_task_or_404(storage: Storage, task_id: int) -> Task:
    task = storage.tasks.get(task_id)
    if not task:
        raise NotFoundError("Task not found")
    return task


def get_checklist_item_or_404(storage: Storage, item_id: int) -> ChecklistItem:
    item = storage.checklist.get(item_id)
    if not item:
        raise NotFoundError("Checklist item not found")
    return item


def get_file_or_404(storage: Storage, file_id: int) -> ProjectFile:
    record = storage.files.get(file_id)
    if not record:
        raise NotFoundError("File not found")
    return record


def get_comment_or_404(storage: Storage, comment_id: int) -> Comment:
    comment = storage.comments.get(comment_id)
    if not comment:
        raise NotFoundError("Comment not found")
    return comment


# ---------------- dependency ----------------

@dataclass
class ProjectContext:
    project: Project
    user: User
    scope: ProjectScope
    storage: Storage


class ProjectAccess:
    """
    Dependency for routes with a ``project_id`` path parameter.

    Usage:
        @router.get("/projects/{project_id}/phases")
        def list_phases(ctx: ProjectContext = Depends(ProjectAccess(Capability.PHASE_VIEW))):
            ...
    """

    def __init__(self, capability: str):
        self.capability = capability

    def __call__(
        self,
        project_id: int,
        storage: Storage = Depends(get_storage),
        current_user: User = Depends(get_current_user),
    ) -> ProjectContext:
        project = get_project_or_404(storage, project_id)
        scope = require(storage, current_user, self.capability, project.id)
        return ProjectContext(project=project, user=current_user, scope=scope, storage=storage)
