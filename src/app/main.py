import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from src.app.config import settings
from src.app.exceptions import register_exception_handlers
from src.app.logging_config import setup_logging
from src.app.middleware import register_middleware
from src.api.v1.router import api_router
from src.api.v1.websockets import live
from src.services.broadcaster import GalleryBroadcaster


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    broadcaster = GalleryBroadcaster()
    broadcaster.bind_loop(asyncio.get_running_loop())
    app.state.broadcaster = broadcaster
    logger.info(f"🚀 Starting {settings.APP_NAME} ({settings.ENVIRONMENT})")
    yield
    # Shutdown
    broadcaster.unbind_loop()
    logger.info("Shutting down...")


def create_application() -> FastAPI:
    application = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version="0.1.0",
        lifespan=lifespan,
    )

    # Middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(GZipMiddleware, minimum_size=1000)
    register_middleware(application)
    register_exception_handlers(application)

    # Routers
    application.include_router(api_router, prefix=settings.API_V1_PREFIX)
    # Dashboards connect to /ws without the API prefix
    application.include_router(live.router, tags=["live"])

    @application.get("/health")
    async def health_check():
        return {"status": "healthy", "environment": settings.ENVIRONMENT}

    return application


app = create_application()
