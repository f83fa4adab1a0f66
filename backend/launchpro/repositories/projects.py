from typing import List, Optional

from launchpro.models.project import Project, ProjectMember, ProjectRole
from launchpro.repositories.base import Repository


class ProjectRepository(Repository[Project]):
    model = Project

    def list(self) -> List[Project]:
        return self.db.query(Project).order_by(Project.created_at.desc(), Project.id.desc()).all()

    def list_for_user(self, user_id: int) -> List[Project]:
        return (
            self.db.query(Project)
            .join(ProjectMember, ProjectMember.project_id == Project.id)
            .filter(ProjectMember.user_id == user_id)
            .order_by(Project.created_at.desc(), Project.id.desc())
            .all()
        )

    def lock(self, project_id: int) -> Optional[Project]:
        """Row-lock the project for the rest of the transaction (no-op on SQLite)."""
        return (
            self.db.query(Project)
            .filter(Project.id == project_id)
            .with_for_update()
            .first()
        )


class MemberRepository(Repository[ProjectMember]):
    model = ProjectMember

    def get_membership(self, project_id: int, user_id: int) -> Optional[ProjectMember]:
        return self.db.query(ProjectMember).filter(
            ProjectMember.project_id == project_id,
            ProjectMember.user_id == user_id,
        ).first()

    def list_for_project(self, project_id: int) -> List[ProjectMember]:
        return (
            self.db.query(ProjectMember)
            .filter(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.joined_at, ProjectMember.id)
            .all()
        )

    def count_admins(self, project_id: int) -> int:
        return self.db.query(ProjectMember).filter(
            ProjectMember.project_id == project_id,
            ProjectMember.role == ProjectRole.ADMIN,
        ).count()

    def project_ids_for_user(self, user_id: int) -> List[int]:
        rows = self.db.query(ProjectMember.project_id).filter(ProjectMember.user_id == user_id).all()
        return [project_id for (project_id,) in rows]
