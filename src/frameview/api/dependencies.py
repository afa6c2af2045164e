"""
API Dependencies - Service container access for FastAPI endpoints

Pattern:
1. main_asyncio.py creates ServiceContainer during initialization
2. main_asyncio.py calls set_service_container() after creation
3. API endpoints use get_service_container() dependency via Depends()
"""

from typing import Optional

from fastapi import Depends, HTTPException, status

from frameview.api.services.viewer_api_service import ViewerAPIService
from frameview.services.service_container import ServiceContainer


# Global service container (set during initialization)
_service_container: Optional[ServiceContainer] = None


def set_service_container(services: Optional[ServiceContainer]) -> None:
    """Store the service container for API access (None clears it)."""
    global _service_container
    _service_container = services


async def get_service_container() -> ServiceContainer:
    """
    FastAPI dependency for accessing service container.

    Raises:
        HTTPException: 503 Service Unavailable if services not initialized
    """
    if _service_container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service container not initialized. Viewer service may still be starting."
        )
    return _service_container


async def get_viewer_api_service(
    services: ServiceContainer = Depends(get_service_container)
) -> ViewerAPIService:
    """Dependency building the API wrapper over the container's services."""
    return ViewerAPIService(
        viewer_service=services.viewer_service,
        config_manager=services.config_manager,
        event_bus=services.event_bus,
    )
