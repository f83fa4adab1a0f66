"""
Membership mutations guarded by last-admin protection.

The admin count and the mutation happen under the project's in-process lock
and a row lock on the project, and commit together, so two concurrent
requests cannot both pass the check and leave a project without an admin.
"""
import logging
from contextlib import contextmanager

from launchpro.core.errors import ConflictError, NotFoundError
from launchpro.core.locks import project_membership_locks
from launchpro.models.project import ProjectMember, ProjectRole
from launchpro.repositories.storage import Storage

logger = logging.getLogger(__name__)


@contextmanager
def _membership_transaction(storage: Storage, project_id: int):
    with project_membership_locks.hold(project_id):
        try:
            if not storage.projects.lock(project_id):
                raise NotFoundError("Project not found")
            yield
            storage.commit()
        except Exception:
            storage.rollback()
            raise


def add_member(storage: Storage, project_id: int, user_id: int, role: str) -> ProjectMember:
    with _membership_transaction(storage, project_id):
        if storage.members.get_membership(project_id, user_id):
            raise ConflictError("User is already a member of this project")
        member = storage.members.add(ProjectMember(project_id=project_id, user_id=user_id, role=role))
    storage.refresh(member)
    return member


def remove_member(storage: Storage, project_id: int, user_id: int) -> None:
    with _membership_transaction(storage, project_id):
        member = storage.members.get_membership(project_id, user_id)
        if not member:
            raise NotFoundError("Member not found")
        if member.role == ProjectRole.ADMIN and storage.members.count_admins(project_id) <= 1:
            logger.info("Refused to remove last admin %s of project %s", user_id, project_id)
            raise ConflictError("Cannot remove the last administrator of the project")
        storage.members.delete(member)


def change_member_role(storage: Storage, project_id: int, user_id: int, role: str) -> ProjectMember:
    with _membership_transaction(storage, project_id):
        member = storage.members.get_membership(project_id, user_id)
        if not member:
            raise NotFoundError("User is not a member of this project")
        if (
            member.role == ProjectRole.ADMIN
            and role != ProjectRole.ADMIN
            and storage.members.count_admins(project_id) <= 1
        ):
            logger.info("Refused to demote last admin %s of project %s", user_id, project_id)
            raise ConflictError("Cannot demote the last administrator of the project")
        storage.members.update(member, {"role": role})
    return member
