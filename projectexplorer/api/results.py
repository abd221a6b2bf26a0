"""
Results API endpoints.

Serves the last published result list for display.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from projectexplorer.api.dependencies import get_state
from projectexplorer.api.schemas import ProjectModel
from projectexplorer.models.project import Project
from projectexplorer.services.explorer_state import ExplorerState

router = APIRouter(prefix="/results", tags=["results"])


class ResultsResponse(BaseModel):
    """Ordered results: priority buckets first, untagged last."""

    count: int = 0
    version: int = Field(
        default=0,
        description="Number of times results have been published",
    )
    projects: list[ProjectModel] = Field(default_factory=list)


def build_results_response(results: list[Project], version: int) -> ResultsResponse:
    return ResultsResponse(
        count=len(results),
        version=version,
        projects=[ProjectModel.from_project(project) for project in results],
    )


@router.get("", response_model=ResultsResponse)
async def get_results(
    state: Annotated[ExplorerState, Depends(get_state)],
) -> ResultsResponse:
    """Get the current results in display order."""
    return build_results_response(state.get_results(), state.results_version)
