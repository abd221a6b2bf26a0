"""
Filter API endpoints.

Changing the filter selection re-runs the results pipeline immediately.
Changing the title search schedules a debounced run, so a client can send
every keystroke and only the last edit in a burst is applied.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from projectexplorer.api.dependencies import get_state, get_watcher
from projectexplorer.api.results import ResultsResponse, build_results_response
from projectexplorer.api.schemas import FilterModel
from projectexplorer.models.project import FilterDimension
from projectexplorer.services.explorer_state import ExplorerState
from projectexplorer.services.results_watcher import ResultsWatcher

router = APIRouter(prefix="/filters", tags=["filters"])


class FilterStateResponse(BaseModel):
    """Current filter state."""

    selected: list[FilterModel] = Field(default_factory=list)
    title_substring: str = ""
    search_pending: bool = Field(
        default=False,
        description="True while a debounced title search run is scheduled",
    )


class FiltersUpdateRequest(BaseModel):
    """Request model for replacing the filter selection."""

    filters: list[FilterModel] = Field(
        default_factory=list,
        description="Complete filter selection; duplicates are collapsed",
        examples=[[{"dimension": "category", "value": "Shader"}]],
    )


class TitleSearchRequest(BaseModel):
    """Request model for updating the title search."""

    title_substring: str = Field(
        default="",
        description="Case-insensitive substring to look for in project names",
        examples=["vulkan"],
    )


def _filter_state(state: ExplorerState, watcher: ResultsWatcher) -> FilterStateResponse:
    selected = sorted(
        (
            FilterModel.from_filter(f)
            for f in state.get_selected_filters()
            if FilterDimension.parse(f.dimension) is not None
        ),
        key=lambda f: (f.dimension.value, f.value),
    )
    return FilterStateResponse(
        selected=selected,
        title_substring=state.get_title_substring(),
        search_pending=watcher.has_pending_run,
    )


@router.get("", response_model=FilterStateResponse)
async def get_filters(
    state: Annotated[ExplorerState, Depends(get_state)],
    watcher: Annotated[ResultsWatcher, Depends(get_watcher)],
) -> FilterStateResponse:
    """Get the selected filters and title search."""
    return _filter_state(state, watcher)


@router.put("", response_model=ResultsResponse)
async def replace_filters(
    request: FiltersUpdateRequest,
    state: Annotated[ExplorerState, Depends(get_state)],
    watcher: Annotated[ResultsWatcher, Depends(get_watcher)],
) -> ResultsResponse:
    """Replace the filter selection and return the new results."""
    state.set_selected_filters(f.to_filter() for f in request.filters)
    results = watcher.on_selected_filters_updated()
    return build_results_response(results, state.results_version)


@router.post("/select", response_model=ResultsResponse)
async def select_filter(
    request: FilterModel,
    state: Annotated[ExplorerState, Depends(get_state)],
    watcher: Annotated[ResultsWatcher, Depends(get_watcher)],
) -> ResultsResponse:
    """Add one filter to the selection and return the new results."""
    state.select_filter(request.to_filter())
    results = watcher.on_selected_filters_updated()
    return build_results_response(results, state.results_version)


@router.post("/deselect", response_model=ResultsResponse)
async def deselect_filter(
    request: FilterModel,
    state: Annotated[ExplorerState, Depends(get_state)],
    watcher: Annotated[ResultsWatcher, Depends(get_watcher)],
) -> ResultsResponse:
    """Remove one filter from the selection and return the new results."""
    state.deselect_filter(request.to_filter())
    results = watcher.on_selected_filters_updated()
    return build_results_response(results, state.results_version)


@router.put(
    "/title",
    response_model=FilterStateResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def update_title_search(
    request: TitleSearchRequest,
    state: Annotated[ExplorerState, Depends(get_state)],
    watcher: Annotated[ResultsWatcher, Depends(get_watcher)],
) -> FilterStateResponse:
    """
    Update the title search.

    Results are not recomputed in this request. The run is scheduled after
    the debounce quiet period; poll GET /results for the outcome.
    """
    state.set_title_substring(request.title_substring)
    watcher.on_title_substring_updated()
    return _filter_state(state, watcher)
