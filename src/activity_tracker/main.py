# src/activity_tracker/main.py
"""Main entry point for the activity tracker application."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from activity_tracker.api.v1 import activity_router, items_router, system_router
from activity_tracker.core.logging import configure_logging
from activity_tracker.core.settings import settings
from activity_tracker.services.sweeper import TrackerSweepWorker

# Initialize FastAPI app
app = FastAPI(
    title="Activity Tracker API",
    description="Recent content activity, indexed per item and per participant",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(items_router, prefix="/api/v1")
app.include_router(activity_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    if settings.tracker_sweep_enabled:
        worker = TrackerSweepWorker()
        await worker.start()
        app.state.sweep_worker = worker
    else:
        app.state.sweep_worker = None


@app.on_event("shutdown")
async def on_shutdown() -> None:
    worker: TrackerSweepWorker | None = getattr(app.state, "sweep_worker", None)
    if worker:
        await worker.stop()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("activity_tracker.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
