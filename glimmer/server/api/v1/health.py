"""
Health Check Endpoints.

This module provides basic system status endpoints (health, version)
used for monitoring and deployment verification.
"""

from fastapi import APIRouter

from glimmer.server.core.constant import API_VERSION
from glimmer.server.services.deps import RegistryDep

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check the operational status of the API server.",
    response_description="Status object.",
)
async def health_check(registry: RegistryDep):
    """
    Health check endpoint.

    Returns a simple status indicator and the number of open WebSocket connections.
    """
    return {"status": "ok", "connections": len(registry)}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version():
    """
    Get API version.

    Returns the current semantic version of the API and supported schema version.
    """
    return {"version": API_VERSION, "schema_version": "v1"}
