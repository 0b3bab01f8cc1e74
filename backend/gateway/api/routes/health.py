"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up
    - Never touches an upstream
"""

from fastapi import APIRouter, status

from gateway import __version__
from gateway.core.route_table import API_PREFIX

router = APIRouter(prefix=f"{API_PREFIX}/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "integration-gateway",
        "version": __version__,
    }
