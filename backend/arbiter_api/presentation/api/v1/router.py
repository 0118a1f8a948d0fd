"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from arbiter_api.presentation.api.v1.endpoints.health import router as health_router
from arbiter_api.presentation.api.v1.endpoints.decisions import router as decisions_router
from arbiter_api.presentation.api.v1.endpoints.enquiries import router as enquiries_router
from arbiter_api.presentation.api.v1.endpoints.complaints import router as complaints_router
from arbiter_api.presentation.api.v1.endpoints.complaints import users_router
from arbiter_api.presentation.api.v1.endpoints.directors import router as directors_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(decisions_router)
router.include_router(enquiries_router)
router.include_router(complaints_router)
router.include_router(users_router)
router.include_router(directors_router)
