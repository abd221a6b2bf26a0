"""
In-memory explorer state.

Holds the project list, the user's filter selection, the title search
substring and the last published results. Mutators only change state;
callers notify the ResultsWatcher so the pipeline re-runs.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from projectexplorer.models.project import Filter, Project

logger = logging.getLogger(__name__)


@dataclass
class ExplorerState:
    """Current projects, filter state and results."""

    _projects: list[Project] = field(default_factory=list)
    _selected_filters: set[Filter] = field(default_factory=set)
    _title_substring: str = ""
    _results: list[Project] = field(default_factory=list)
    _results_version: int = 0

    # Accessors read by the pipeline runner

    def get_projects(self) -> list[Project]:
        return list(self._projects)

    def get_selected_filters(self) -> set[Filter]:
        return set(self._selected_filters)

    def get_title_substring(self) -> str:
        return self._title_substring

    # Results

    def store_results(self, results: Sequence[Project]) -> None:
        """Publish a new result list. The latest write wins."""
        self._results = list(results)
        self._results_version += 1
        logger.debug("Stored %d results (version %d)", len(self._results), self._results_version)

    def get_results(self) -> list[Project]:
        return list(self._results)

    @property
    def results_version(self) -> int:
        """Number of times results have been published."""
        return self._results_version

    # Mutators

    def set_projects(self, projects: Iterable[Project]) -> None:
        self._projects = list(projects)

    def set_selected_filters(self, filters: Iterable[Filter]) -> None:
        self._selected_filters = set(filters)

    def select_filter(self, selected: Filter) -> bool:
        """Add a filter. Returns False if it was already selected."""
        if selected in self._selected_filters:
            return False
        self._selected_filters.add(selected)
        return True

    def deselect_filter(self, selected: Filter) -> bool:
        """Remove a filter. Returns False if it was not selected."""
        if selected not in self._selected_filters:
            return False
        self._selected_filters.discard(selected)
        return True

    def clear_filters(self) -> None:
        self._selected_filters.clear()

    def set_title_substring(self, title_substring: str | None) -> None:
        self._title_substring = title_substring or ""
