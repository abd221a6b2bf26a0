"""
Explorer state and watcher shared by the API.

One ExplorerState and one ResultsWatcher per process.
"""

from projectexplorer.services.explorer_state import ExplorerState
from projectexplorer.services.results_watcher import ResultsWatcher

_state = ExplorerState()
_watcher: ResultsWatcher | None = None


def get_state() -> ExplorerState:
    """Dependency that provides the explorer state."""
    return _state


def get_watcher() -> ResultsWatcher:
    """
    Dependency that provides the results watcher.

    Usage in FastAPI:
        @router.put("/filters")
        async def update(watcher: ResultsWatcher = Depends(get_watcher)):
            ...
    """
    global _watcher
    if _watcher is None:
        _watcher = ResultsWatcher(_state)
    return _watcher


def reset_explorer() -> None:
    """
    Reset shared state and watcher (for testing).

    A pending debounced run is not cancelled here; close the watcher with
    `aclose()` from its event loop first.
    """
    global _state, _watcher
    _state = ExplorerState()
    _watcher = None
