"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from worktracker.presentation.api.v1.endpoints.health import router as health_router
from worktracker.presentation.api.v1.endpoints.entries import router as entries_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(entries_router)
