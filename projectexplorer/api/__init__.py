from projectexplorer.api.filters import router as filters_router
from projectexplorer.api.health import router as health_router
from projectexplorer.api.results import router as results_router

__all__ = [
    "filters_router",
    "health_router",
    "results_router",
]
