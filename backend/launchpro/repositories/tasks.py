from typing import Iterable, List

from sqlalchemy import or_

from launchpro.models.phase import Phase
from launchpro.models.task import ChecklistItem, Task
from launchpro.repositories.base import Repository


class PhaseRepository(Repository[Phase]):
    model = Phase

    def list_for_project(self, project_id: int) -> List[Phase]:
        return (
            self.db.query(Phase)
            .filter(Phase.project_id == project_id)
            .order_by(Phase.position, Phase.id)
            .all()
        )


class TaskRepository(Repository[Task]):
    model = Task

    def list_for_project(self, project_id: int) -> List[Task]:
        return self.db.query(Task).filter(Task.project_id == project_id).order_by(Task.id).all()

    def list_for_phase(self, phase_id: int) -> List[Task]:
        return self.db.query(Task).filter(Task.phase_id == phase_id).order_by(Task.id).all()

    def list_assigned_to(self, user_id: int) -> List[Task]:
        return self.db.query(Task).filter(Task.assigned_to == user_id).order_by(Task.id).all()

    def list_visible_to(self, user_id: int, project_ids: Iterable[int]) -> List[Task]:
        """Tasks assigned to the user or living in one of their projects."""
        project_ids = list(project_ids)
        condition = Task.assigned_to == user_id
        if project_ids:
            condition = or_(condition, Task.project_id.in_(project_ids))
        return self.db.query(Task).filter(condition).order_by(Task.id).all()


class ChecklistRepository(Repository[ChecklistItem]):
    model = ChecklistItem

    def list_for_task(self, task_id: int) -> List[ChecklistItem]:
        return (
            self.db.query(ChecklistItem)
            .filter(ChecklistItem.task_id == task_id)
            .order_by(ChecklistItem.position, ChecklistItem.id)
            .all()
        )
