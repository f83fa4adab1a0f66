import logging
import os

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from launchpro.config import settings
from launchpro.core.errors import register_exception_handlers
from launchpro.core.logging_setup import setup_logging
from launchpro.database.base import Base
from launchpro.database.session import engine
from launchpro.models.user import User  # noqa: F401
from launchpro.models.user_session import UserSession  # noqa: F401
from launchpro.models.project import Project, ProjectMember  # noqa: F401
from launchpro.models.phase import Phase  # noqa: F401
from launchpro.models.task import Task, ChecklistItem  # noqa: F401
from launchpro.models.file import ProjectFile  # noqa: F401
from launchpro.models.activity import Activity  # noqa: F401
from launchpro.models.comment import Comment  # noqa: F401
from launchpro.models.integration import Integration, AppSettings  # noqa: F401
from launchpro.schemas.common import ErrorResponse
from launchpro.routes import (
    activities,
    auth,
    checklist,
    comments,
    files,
    integrations,
    members,
    phases,
    projects,
    settings as settings_routes,
    tasks,
    users,
)

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)

# only logos are public; project attachments go through /api/files/{id}/download
app.mount(
    "/uploads/logos",
    StaticFiles(directory=os.path.join(settings.UPLOAD_DIR, "logos"), check_dir=False),
    name="logos",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.on_event("startup")
def create_tables():
    os.makedirs(os.path.join(settings.UPLOAD_DIR, "logos"), exist_ok=True)
    Base.metadata.create_all(bind=engine)
    logger.info("%s started (%s)", settings.APP_NAME, settings.ENVIRONMENT)


api = APIRouter(
    prefix="/api",
    responses={
        code: {"model": ErrorResponse}
        for code in (400, 401, 403, 404, 500)
    },
)


@api.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}


api.include_router(auth.router)
api.include_router(users.router)
api.include_router(projects.router)
api.include_router(members.router)
api.include_router(phases.router)
api.include_router(tasks.router)
api.include_router(checklist.router)
api.include_router(files.router)
api.include_router(activities.router)
api.include_router(comments.router)
api.include_router(settings_routes.router)
api.include_router(integrations.router)

app.include_router(api)
