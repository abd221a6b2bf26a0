"""
Project Explorer services.

State, trigger handling and catalog loading around the results pipeline.
"""

from projectexplorer.services.explorer_state import ExplorerState
from projectexplorer.services.project_catalog import (
    ProjectCatalogError,
    ProjectRecord,
    load_project_catalog,
    parse_project_catalog,
)
from projectexplorer.services.results_watcher import ResultsWatcher

__all__ = [
    "ExplorerState",
    "ResultsWatcher",
    # Project catalog
    "ProjectCatalogError",
    "ProjectRecord",
    "load_project_catalog",
    "parse_project_catalog",
]
