from fastapi import APIRouter

from mini_jira.core import get_settings
from mini_jira.api.v1.auth import router as auth_router
from mini_jira.api.v1.projects import router as projects_router
from mini_jira.api.v1.boards import router as boards_router
from mini_jira.api.v1.columns import router as columns_router
from mini_jira.api.v1.tasks import router as tasks_router
from mini_jira.api.v1.labels import router as labels_router
from mini_jira.api.v1.comments import router as comments_router

settings = get_settings()

# Create main API router
api_router = APIRouter(prefix=settings.API_PREFIX)

# Include routers
api_router.include_router(auth_router)
api_router.include_router(projects_router)
api_router.include_router(boards_router)
api_router.include_router(columns_router)
api_router.include_router(tasks_router)
api_router.include_router(labels_router)
api_router.include_router(comments_router)
