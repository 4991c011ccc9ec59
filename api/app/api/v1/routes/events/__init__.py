"""Per-host event route grouping."""
from fastapi import APIRouter

from app.api.v1.routes.events.queue import router as queue_router
from app.api.v1.routes.events.playback import router as playback_router

router = APIRouter()
router.include_router(queue_router)
router.include_router(playback_router)
