from __future__ import annotations

from typing import Optional

from launchpro.core.errors import ValidationError, field_error
from launchpro.models.phase import Phase
from launchpro.models.task import Task
from launchpro.repositories.storage import Storage


def require_phase_in_project(storage: Storage, phase_id: Optional[int], project_id: int) -> Optional[Phase]:
    if phase_id is None:
        return None
    phase = storage.phases.get(phase_id)
    if not phase or phase.project_id != project_id:
        raise ValidationError(
            "Phase does not belong to this project",
            errors=[field_error("phase_id", "Phase does not belong to this project")],
        )
    return phase


def require_task_in_project(storage: Storage, task_id: Optional[int], project_id: int) -> Optional[Task]:
    if task_id is None:
        return None
    task = storage.tasks.get(task_id)
    if not task or task.project_id != project_id:
        raise ValidationError(
            "Task does not belong to this project",
            errors=[field_error("task_id", "Task does not belong to this project")],
        )
    return task


def require_project_member(storage: Storage, user_id: Optional[int], project_id: int, field_name: str = "assigned_to") -> None:
    if user_id is None:
        return
    if not storage.members.get_membership(project_id, user_id):
        raise ValidationError(
            "User is not a member of this project",
            errors=[field_error(field_name, "User is not a member of this project")],
        )
