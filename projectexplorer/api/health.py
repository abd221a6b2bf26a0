"""
Health check endpoints.

Provides a liveness probe.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from projectexplorer.api.dependencies import get_state
from projectexplorer.services.explorer_state import ExplorerState

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    projects: int = 0


@router.get("/health", response_model=HealthResponse)
async def health(
    state: Annotated[ExplorerState, Depends(get_state)],
) -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running, with the number of
    projects currently loaded.
    """
    return HealthResponse(status="healthy", projects=len(state.get_projects()))
