"""
Results watcher: re-runs the pipeline when filter state changes.

Two triggers:
- Selected filters updated: the pipeline runs immediately.
- Title substring updated: the run is debounced. Each update cancels the
  pending run and schedules a new one after the quiet period, so a burst
  of edits produces exactly one run using the final substring.

The debounced run is an asyncio task, so title updates must be delivered
from inside a running event loop.
"""

import asyncio
import logging
from collections.abc import Sequence

from projectexplorer.config import settings
from projectexplorer.filtering.pipeline import run_pipeline
from projectexplorer.models.project import Project
from projectexplorer.services.explorer_state import ExplorerState

logger = logging.getLogger(__name__)


class ResultsWatcher:
    """Runs the results pipeline against an ExplorerState on trigger events."""

    def __init__(
        self,
        state: ExplorerState,
        debounce_seconds: float | None = None,
        tag_priority: Sequence[str] | None = None,
        fan_out: bool | None = None,
    ):
        self.state = state
        self.debounce_seconds = (
            debounce_seconds
            if debounce_seconds is not None
            else settings.title_search_debounce_ms / 1000
        )
        self.tag_priority = tuple(
            tag_priority if tag_priority is not None else settings.tag_priority
        )
        self.fan_out = fan_out if fan_out is not None else settings.legacy_bucket_fan_out
        self.debounce_task: asyncio.Task[None] | None = None

    @property
    def has_pending_run(self) -> bool:
        return self.debounce_task is not None and not self.debounce_task.done()

    def apply_filters(self) -> list[Project]:
        """Read the current state, run the pipeline and store the results."""
        results = run_pipeline(
            self.state.get_projects(),
            self.state.get_selected_filters(),
            self.state.get_title_substring(),
            tag_priority=self.tag_priority,
            fan_out=self.fan_out,
        )
        self.state.store_results(results)
        return results

    def on_selected_filters_updated(self) -> list[Project]:
        """Filter selection changed: run now."""
        return self.apply_filters()

    def on_title_substring_updated(self) -> None:
        """Title substring changed: (re)schedule a debounced run."""
        self.cancel_pending()
        self.debounce_task = asyncio.get_running_loop().create_task(self._run_after_debounce())
        logger.debug("Title search run scheduled in %.3fs", self.debounce_seconds)

    def cancel_pending(self) -> bool:
        """Cancel the scheduled debounced run. Returns True if one was pending."""
        task = self.debounce_task
        if task is None or task.done():
            return False
        task.cancel()
        # cancel() only takes effect when the loop next runs the task
        self.debounce_task = None
        return True

    async def _run_after_debounce(self) -> None:
        """Wait for the quiet period, then run."""
        await asyncio.sleep(self.debounce_seconds)

        logger.info("Debounce fired: applying title search %r", self.state.get_title_substring())
        try:
            self.apply_filters()
        except Exception as e:
            logger.error(f"Debounced pipeline run failed: {e}", exc_info=True)

    async def aclose(self) -> None:
        """Cancel any pending run and wait for it to finish unwinding."""
        task = self.debounce_task
        if self.cancel_pending() and task is not None:
            try:
                await task
            except asyncio.CancelledError:
                logger.debug("Pending title search run cancelled on close")
