"""API v1 router."""
from fastapi import APIRouter

from app.api.v1.routes.events import router as events_router

router = APIRouter()
router.include_router(events_router, prefix="/events", tags=["events"])
