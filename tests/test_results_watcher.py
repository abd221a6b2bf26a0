"""
Tests for the results watcher.

INVARIANTS:
- Filter selection changes re-run the pipeline immediately
- A burst of title edits produces exactly one run, with the final text
- A pending title run can be cancelled
"""

import asyncio
from collections.abc import Sequence

import pytest

from projectexplorer.config import settings
from projectexplorer.models.project import Filter, FilterDimension, Project
from projectexplorer.services.explorer_state import ExplorerState
from projectexplorer.services.results_watcher import ResultsWatcher

DEBOUNCE = 0.1


class RecordingState(ExplorerState):
    """Explorer state that records every published result list."""

    def __init__(self) -> None:
        super().__init__()
        self.stored: list[list[str]] = []

    def store_results(self, results: Sequence[Project]) -> None:
        self.stored.append([p.name for p in results])
        super().store_results(results)


@pytest.fixture
def state(sample_projects: list[Project]) -> RecordingState:
    state = RecordingState()
    state.set_projects(sample_projects)
    return state


@pytest.fixture
def watcher(state: RecordingState) -> ResultsWatcher:
    return ResultsWatcher(state, debounce_seconds=DEBOUNCE)


class TestConfiguration:
    def test_defaults_from_settings(self) -> None:
        watcher = ResultsWatcher(ExplorerState())

        assert watcher.debounce_seconds == settings.title_search_debounce_ms / 1000
        assert watcher.tag_priority == tuple(settings.tag_priority)
        assert watcher.fan_out is settings.legacy_bucket_fan_out

    def test_default_quiet_period_is_half_a_second(self) -> None:
        assert ResultsWatcher(ExplorerState()).debounce_seconds == 0.5


class TestSelectedFiltersTrigger:
    def test_runs_immediately(self, state: RecordingState, watcher: ResultsWatcher) -> None:
        state.set_selected_filters([Filter(FilterDimension.CATEGORY, "Shader")])

        results = watcher.on_selected_filters_updated()

        assert [p.name for p in results] == ["glslang", "SPIRV-Cross"]
        assert state.stored == [["glslang", "SPIRV-Cross"]]

    def test_every_update_runs(self, state: RecordingState, watcher: ResultsWatcher) -> None:
        state.select_filter(Filter(FilterDimension.CATEGORY, "Shader"))
        watcher.on_selected_filters_updated()
        state.select_filter(Filter(FilterDimension.LANGUAGE, "Python"))
        watcher.on_selected_filters_updated()

        assert state.stored == [["glslang", "SPIRV-Cross"], ["SPIRV-Cross"]]

    def test_uses_configured_priority(self, state: RecordingState) -> None:
        watcher = ResultsWatcher(state, debounce_seconds=DEBOUNCE, tag_priority=["Staff Picks"])

        results = watcher.on_selected_filters_updated()

        assert [p.name for p in results][:2] == ["awesome-vulkan", "glslang"]

    def test_fan_out_flag(self, state: RecordingState) -> None:
        watcher = ResultsWatcher(state, debounce_seconds=DEBOUNCE, fan_out=True)

        results = watcher.on_selected_filters_updated()

        # glslang carries both priority tags
        assert [p.name for p in results].count("glslang") == 2


class TestTitleSubstringTrigger:
    async def test_burst_runs_once_with_final_text(
        self, state: RecordingState, watcher: ResultsWatcher
    ) -> None:
        """Three quick edits → one run, using the last substring."""
        for text in ("v", "vu", "vulkan"):
            state.set_title_substring(text)
            watcher.on_title_substring_updated()
            await asyncio.sleep(DEBOUNCE / 5)

        assert state.stored == []

        await asyncio.sleep(DEBOUNCE * 4)

        assert state.stored == [["Vulkan-Samples", "awesome-vulkan"]]
        assert not watcher.has_pending_run

    async def test_not_run_before_quiet_period(
        self, state: RecordingState, watcher: ResultsWatcher
    ) -> None:
        state.set_title_substring("bgfx")
        watcher.on_title_substring_updated()

        assert watcher.has_pending_run
        assert state.stored == []

        await asyncio.sleep(DEBOUNCE * 4)

        assert state.stored == [["bgfx"]]

    async def test_separate_bursts_run_separately(
        self, state: RecordingState, watcher: ResultsWatcher
    ) -> None:
        state.set_title_substring("bgfx")
        watcher.on_title_substring_updated()
        await asyncio.sleep(DEBOUNCE * 4)

        state.set_title_substring("cross")
        watcher.on_title_substring_updated()
        await asyncio.sleep(DEBOUNCE * 4)

        assert state.stored == [["bgfx"], ["SPIRV-Cross"]]

    async def test_filter_update_does_not_wait(
        self, state: RecordingState, watcher: ResultsWatcher
    ) -> None:
        """A filter change during a pending search runs at once; the search still follows."""
        state.set_title_substring("vulkan")
        watcher.on_title_substring_updated()

        state.select_filter(Filter(FilterDimension.CATEGORY, "Resource"))
        watcher.on_selected_filters_updated()

        assert state.stored == [["awesome-vulkan"]]

        await asyncio.sleep(DEBOUNCE * 4)

        assert state.stored == [["awesome-vulkan"], ["awesome-vulkan"]]

    async def test_cancel_pending(self, state: RecordingState, watcher: ResultsWatcher) -> None:
        state.set_title_substring("vulkan")
        watcher.on_title_substring_updated()

        assert watcher.cancel_pending() is True
        assert watcher.cancel_pending() is False

        await asyncio.sleep(DEBOUNCE * 4)

        assert state.stored == []

    async def test_cancelled_run_not_pending(
        self, state: RecordingState, watcher: ResultsWatcher
    ) -> None:
        """A cancelled run stops counting as pending before the loop unwinds it."""
        state.set_title_substring("vulkan")
        watcher.on_title_substring_updated()
        task = watcher.debounce_task

        watcher.cancel_pending()

        assert not watcher.has_pending_run
        assert task is not None and not task.done()

        await asyncio.sleep(DEBOUNCE / 10)
        assert task.cancelled()

    async def test_reschedule_after_cancel(
        self, state: RecordingState, watcher: ResultsWatcher
    ) -> None:
        state.set_title_substring("vulkan")
        watcher.on_title_substring_updated()
        watcher.cancel_pending()

        state.set_title_substring("bgfx")
        watcher.on_title_substring_updated()

        assert watcher.has_pending_run

        await asyncio.sleep(DEBOUNCE * 4)

        assert state.stored == [["bgfx"]]

    async def test_aclose_cancels(self, state: RecordingState, watcher: ResultsWatcher) -> None:
        state.set_title_substring("vulkan")
        watcher.on_title_substring_updated()

        await watcher.aclose()

        assert not watcher.has_pending_run
        assert state.stored == []

    async def test_aclose_without_pending(self, watcher: ResultsWatcher) -> None:
        await watcher.aclose()

        assert not watcher.has_pending_run

    async def test_failed_run_is_logged(
        self,
        state: RecordingState,
        watcher: ResultsWatcher,
        caplog: pytest.LogCaptureFixture,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """A failing debounced run is logged and the watcher keeps working."""

        def explode() -> list[Project]:
            raise RuntimeError("boom")

        monkeypatch.setattr(watcher, "apply_filters", explode)

        watcher.on_title_substring_updated()
        await asyncio.sleep(DEBOUNCE * 4)

        assert "Debounced pipeline run failed: boom" in caplog.text
        assert not watcher.has_pending_run

        monkeypatch.undo()
        state.set_title_substring("bgfx")
        watcher.on_title_substring_updated()
        await asyncio.sleep(DEBOUNCE * 4)

        assert state.stored == [["bgfx"]]

    def test_requires_running_loop(self, watcher: ResultsWatcher) -> None:
        with pytest.raises(RuntimeError):
            watcher.on_title_substring_updated()
