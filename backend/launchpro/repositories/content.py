from typing import Iterable, List, Optional

from launchpro.models.activity import Activity
from launchpro.models.comment import Comment
from launchpro.models.file import ProjectFile
from launchpro.repositories.base import Repository


class FileRepository(Repository[ProjectFile]):
    model = ProjectFile

    def list_for_project(self, project_id: int) -> List[ProjectFile]:
        return (
            self.db.query(ProjectFile)
            .filter(ProjectFile.project_id == project_id)
            .order_by(ProjectFile.created_at.desc(), ProjectFile.id.desc())
            .all()
        )

    def list_for_task(self, task_id: int) -> List[ProjectFile]:
        return (
            self.db.query(ProjectFile)
            .filter(ProjectFile.task_id == task_id)
            .order_by(ProjectFile.created_at.desc(), ProjectFile.id.desc())
            .all()
        )


class CommentRepository(Repository[Comment]):
    model = Comment

    def list_for_project(self, project_id: int) -> List[Comment]:
        return (
            self.db.query(Comment)
            .filter(Comment.project_id == project_id)
            .order_by(Comment.created_at, Comment.id)
            .all()
        )

    def list_for_task(self, task_id: int) -> List[Comment]:
        return (
            self.db.query(Comment)
            .filter(Comment.task_id == task_id)
            .order_by(Comment.created_at, Comment.id)
            .all()
        )


class ActivityRepository(Repository[Activity]):
    """Append-only: no update or delete is exposed."""

    model = Activity

    def update(self, entity, changes):
        raise TypeError("Activities are immutable")

    def delete(self, entity):
        raise TypeError("Activities are immutable")

    def list_recent(self, project_ids: Optional[Iterable[int]] = None, limit: Optional[int] = None) -> List[Activity]:
        query = self.db.query(Activity)
        if project_ids is not None:
            project_ids = list(project_ids)
            if not project_ids:
                return []
            query = query.filter(Activity.project_id.in_(project_ids))
        query = query.order_by(Activity.created_at.desc(), Activity.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()
