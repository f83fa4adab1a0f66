from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from launchpro.core.authz import Capability
from launchpro.core.dependencies import get_current_user
from launchpro.core.permissions import ProjectAccess, ProjectContext
from launchpro.models.user import User
from launchpro.repositories.storage import Storage, get_storage
from launchpro.schemas.activity import ActivityOut
from launchpro.services.activity_service import project_activities, recent_activities

router = APIRouter(tags=["Activities"])


@router.get("/activities", response_model=List[ActivityOut])
def list_activities(
    limit: Optional[int] = Query(None, ge=1, le=500),
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    return recent_activities(storage, current_user, limit=limit)


@router.get("/projects/{project_id}/activities", response_model=List[ActivityOut])
def list_project_activities(
    limit: Optional[int] = Query(None, ge=1, le=500),
    ctx: ProjectContext = Depends(ProjectAccess(Capability.ACTIVITY_VIEW)),
):
    return project_activities(ctx.storage, ctx.project.id, limit=limit)
