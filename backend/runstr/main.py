"""
RUNSTR DVM - FastAPI Application
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from runstr.core.config import settings
from runstr.core.logging import setup_logging, get_logger
from runstr.api import events, tasks
from runstr.services.feed import RunningFeed, TemplateCatalog, WorkoutRecordStore
from runstr.services.tasks import TaskDispatcher

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    logger.info(
        "Starting RUNSTR DVM",
        version=settings.SERVICE_VERSION,
        tasks=[task.name for task in app.state.dispatcher.describe_tasks()],
    )

    yield

    # Shutdown
    logger.info("Shutting down RUNSTR DVM")


def create_app(dispatcher: Optional[TaskDispatcher] = None) -> FastAPI:
    """
    Build the application around a dispatcher.

    Args:
        dispatcher: Dispatcher to serve; a fresh one with empty stores
            is created when omitted

    Returns:
        FastAPI application
    """
    app = FastAPI(
        title=f"{settings.SERVICE_NAME} API",
        description=settings.SERVICE_DESCRIPTION,
        version=settings.SERVICE_VERSION,
        lifespan=lifespan,
    )
    app.state.dispatcher = dispatcher or TaskDispatcher(
        RunningFeed(), TemplateCatalog(), WorkoutRecordStore()
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(events.router, prefix="/api/events", tags=["events"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/")
    async def service_info():
        """Service description and task list."""
        return {
            "name": f"{settings.SERVICE_NAME} API",
            "description": settings.SERVICE_DESCRIPTION,
            "version": settings.SERVICE_VERSION,
            "tasks": [
                {
                    "name": task.name,
                    "description": task.description,
                    "endpoint": f"/api/tasks/{task.name}",
                }
                for task in app.state.dispatcher.describe_tasks()
            ],
        }

    return app


app = create_app()
