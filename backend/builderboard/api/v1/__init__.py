"""API v1 router aggregation."""

from fastapi import APIRouter

from builderboard.api.v1.auth import router as auth_router
from builderboard.api.v1.jobs import router as jobs_router
from builderboard.api.v1.applications import router as applications_router
from builderboard.api.v1.projects import router as projects_router
from builderboard.api.v1.profile import router as profile_router

router = APIRouter(prefix="/api/v1")

router.include_router(auth_router)
router.include_router(jobs_router)
router.include_router(applications_router)
router.include_router(projects_router)
router.include_router(profile_router)
