"""
Kanban Calendar API - Main Application Entry Point

Projects, Kanban tasks and a working-hours calendar the tasks are
scheduled into.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kanban_calendar.core.config import get_settings
from kanban_calendar.core.logger import logger
from kanban_calendar.utils.datetime_utils import now_utc


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    settings = get_settings()
    logger.info(f"Starting Kanban Calendar API in {settings.ENVIRONMENT} mode...")

    from kanban_calendar.infrastructure.local.database import init_db

    await init_db()

    yield

    logger.info("Shutting down Kanban Calendar API...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Kanban Calendar API",
        description="Projects, Kanban tasks and working-hours task scheduling",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from kanban_calendar.api import calendar, projects, tasks

    app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(calendar.router, prefix="/api/calendar", tags=["calendar"])

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "OK",
            "message": "Kanban Calendar API is running",
            "environment": settings.ENVIRONMENT,
            "timestamp": now_utc().isoformat(),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
