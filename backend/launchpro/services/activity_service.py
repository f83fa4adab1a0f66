import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from launchpro.models.activity import Activity
from launchpro.models.user import User
from launchpro.repositories.storage import Storage

logger = logging.getLogger(__name__)

DETAILS_MAX_LENGTH = 120


class ActivityAction:
    CREATED = "created"
    UPDATED = "updated"
    ADDED = "added"
    REMOVED = "removed"


def summarize(text: Optional[str], limit: int = DETAILS_MAX_LENGTH) -> str:
    text = " ".join((text or "").split())
    if len(text) <= limit:
        return text
    return text[: limit - 3].rstrip() + "..."


def record_activity(
    storage: Storage,
    *,
    user_id: int,
    project_id: int,
    action: str,
    subject: str,
    details: Optional[str],
    task_id: Optional[int] = None,
) -> Optional[Activity]:
    """Append one audit record for a mutation that already committed.

    A failure here is logged and swallowed; the mutation stays in place.
    """
    activity = Activity(
        user_id=user_id,
        project_id=project_id,
        task_id=task_id,
        action=action,
        subject=subject,
        details=summarize(details) or subject,
    )
    try:
        storage.activities.add(activity)
        storage.commit()
    except SQLAlchemyError:
        storage.rollback()
        logger.exception(
            "Could not record activity '%s %s' on project %s", action, subject, project_id
        )
        return None

    logger.debug("Activity %s: user %s %s %s", activity.id, user_id, action, subject)
    return activity


def recent_activities(storage: Storage, user: User, limit: Optional[int] = None) -> List[Activity]:
    """Activities across the user's projects, newest first; all projects for a global admin."""
    if user.is_admin:
        return storage.activities.list_recent(limit=limit)
    project_ids = storage.members.project_ids_for_user(user.id)
    return storage.activities.list_recent(project_ids, limit=limit)


def project_activities(storage: Storage, project_id: int, limit: Optional[int] = None) -> List[Activity]:
    return storage.activities.list_recent([project_id], limit=limit)
