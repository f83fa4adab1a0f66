from fastapi import Depends
from sqlalchemy.orm import Session

from launchpro.database.session import get_db
from launchpro.repositories.content import ActivityRepository, CommentRepository, FileRepository
from launchpro.repositories.integrations import IntegrationRepository, SettingsRepository
from launchpro.repositories.projects import MemberRepository, ProjectRepository
from launchpro.repositories.tasks import ChecklistRepository, PhaseRepository, TaskRepository
from launchpro.repositories.users import SessionRepository, UserRepository


class Storage:
    """Entity store for one request: a repository per entity kind over a shared session."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.sessions = SessionRepository(db)
        self.projects = ProjectRepository(db)
        self.members = MemberRepository(db)
        self.phases = PhaseRepository(db)
        self.tasks = TaskRepository(db)
        self.checklist = ChecklistRepository(db)
        self.files = FileRepository(db)
        self.comments = CommentRepository(db)
        self.activities = ActivityRepository(db)
        self.integrations = IntegrationRepository(db)
        self.settings = SettingsRepository(db)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def refresh(self, entity) -> None:
        self.db.refresh(entity)


def get_storage(db: Session = Depends(get_db)) -> Storage:
    return Storage(db)
