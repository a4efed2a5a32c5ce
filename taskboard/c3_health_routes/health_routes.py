"""Health check routes for the Taskboard server."""

from datetime import datetime, timezone

from fastapi import APIRouter

from taskboard import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    """Health check endpoint.

    Returns:
        dict: Health status, timestamp, and version
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
    }


@router.get("/api")
def api_root():
    """API root endpoint."""
    return {
        "name": "Taskboard API",
        "version": __version__,
        "endpoints": [
            "/api/auth/register",
            "/api/auth/login",
            "/api/auth/google",
            "/api/users/me",
            "/api/users/password",
            "/api/tasks",
            "/health",
        ],
    }
