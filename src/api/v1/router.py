from fastapi import APIRouter
from src.api.v1.endpoints import selections, notifications, stats
from src.api.v1.websockets import live


api_router = APIRouter()

api_router.include_router(selections.router, prefix="/selections", tags=["selections"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
api_router.include_router(live.router, tags=["live"])
