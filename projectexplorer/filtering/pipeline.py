"""
Results pipeline: filter, search, bucket, sort.

Derives the ordered result list shown to the user from the full project
list, the selected filters and the title search substring.

Stages run in order (authoritative):
1. Tag filter (selected filters, OR within a dimension, AND across)
2. Title search (case-insensitive substring on the project name)
3. Bucketing (priority tags first, UNTAGGED last)
4. Sort and flatten (case-insensitive name within each bucket)

INVARIANTS:
- Stages 1 and 2 are monotonic (only remove projects, never add)
- Same inputs → same output (deterministic)
- Empty filters and empty substring → every project kept (passthrough)
- No stage raises on missing optional data
"""

import logging
from collections import deque
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from projectexplorer.config import settings
from projectexplorer.models.project import Filter, FilterDimension, Project

logger = logging.getLogger(__name__)

# Tags in these groups are pulled to the top of the list.
# Priority is given to tags with lower index values.
TAG_PRIORITY: tuple[str, ...] = ("Khronos Official", "Staff Picks")
UNTAGGED_KEY = "UNTAGGED"

# Bucket name → projects, in bucket order
ResultsBuckets = dict[str, list[Project]]


@dataclass
class PipelineMetrics:
    """Metrics recorded per pipeline run."""

    total_projects: int = 0
    after_tag_filter: int = 0
    after_title_filter: int = 0
    bucket_sizes: dict[str, int] = field(default_factory=dict)
    final_result_size: int = 0


# Module-level metrics accumulator, oldest runs dropped first
_metrics_history: deque[PipelineMetrics] = deque(maxlen=settings.pipeline_metrics_history_size)


def get_pipeline_metrics() -> list[PipelineMetrics]:
    """Get recorded metrics, oldest first."""
    return list(_metrics_history)


def reset_pipeline_metrics() -> None:
    """Reset metrics history (for testing)."""
    _metrics_history.clear()


def _group_filters(selected_filters: Iterable[Filter]) -> dict[FilterDimension, list[str]]:
    """
    Group selected filter values by dimension.

    Filters on a dimension that is not a known axis cannot match anything
    and are left out, with a warning.
    """
    grouped: dict[FilterDimension, list[str]] = {}

    for selected in selected_filters:
        dimension = FilterDimension.parse(selected.dimension)
        if dimension is None:
            logger.warning(
                "Ignoring filter on unknown dimension %r (value %r)",
                selected.dimension,
                selected.value,
            )
            continue
        grouped.setdefault(dimension, []).append(selected.value)

    return grouped


def _matches_dimension(project: Project, dimension: FilterDimension, values: list[str]) -> bool:
    """Within a dimension we do an OR: any selected value is enough."""
    project_values = project.values_for(dimension)
    if not project_values:
        return False
    return any(value in project_values for value in values)


def apply_tag_filters(
    projects: Sequence[Project],
    selected_filters: Iterable[Filter],
) -> list[Project]:
    """
    Keep projects matching every dimension that has a selected filter.

    Dimensions are checked in FilterDimension declaration order and the
    check stops at the first dimension that fails (AND across dimensions).

    If no filter is selected, or none of the selected filters is on a
    known dimension, every project is kept.
    """
    grouped = _group_filters(selected_filters)
    required = [(dim, grouped[dim]) for dim in FilterDimension if dim in grouped]

    if not required:
        return list(projects)

    return [
        project
        for project in projects
        if all(_matches_dimension(project, dimension, values) for dimension, values in required)
    ]


def apply_title_search_filter(
    projects: Sequence[Project],
    title_substring: str | None = None,
) -> list[Project]:
    """Keep projects whose name contains the substring, ignoring case."""
    if not title_substring:
        return list(projects)

    needle = title_substring.casefold()
    return [project for project in projects if needle in project.name.casefold()]


def split_into_buckets(
    projects: Sequence[Project],
    tag_priority: Sequence[str] = TAG_PRIORITY,
    fan_out: bool = False,
) -> ResultsBuckets:
    """
    Group projects into priority-tag buckets, UNTAGGED last.

    A project lands in the bucket of its highest-priority tag, or in
    UNTAGGED when it has no tags or none of its tags is a priority tag.

    With fan_out=True every tag is considered: the project is appended to
    each matching priority bucket, and to UNTAGGED once per tag that is
    not a priority tag. A project can then appear in several buckets.
    """
    buckets: ResultsBuckets = {tag: [] for tag in tag_priority}
    buckets[UNTAGGED_KEY] = []

    for project in projects:
        if not project.has_tags():
            buckets[UNTAGGED_KEY].append(project)
            continue

        if fan_out:
            for tag in project.tags or []:
                if tag in tag_priority:
                    buckets[tag].append(project)
                else:
                    buckets[UNTAGGED_KEY].append(project)
            continue

        bucket = next((tag for tag in tag_priority if tag in project.tags), UNTAGGED_KEY)
        buckets[bucket].append(project)

    return buckets


def apply_sort(
    buckets: Mapping[str, Sequence[Project]],
    tag_priority: Sequence[str] = TAG_PRIORITY,
) -> list[Project]:
    """
    Flatten buckets into the final result order.

    Buckets are emitted in priority order with UNTAGGED last; within a
    bucket projects are sorted by case-insensitive name. The sort is
    stable, so names that differ only in case keep their input order.
    """
    results: list[Project] = []

    for tag in [*tag_priority, UNTAGGED_KEY]:
        bucket = buckets.get(tag, [])
        results.extend(sorted(bucket, key=lambda project: project.name.casefold()))

    return results


def run_pipeline(
    projects: Sequence[Project],
    selected_filters: Iterable[Filter],
    title_substring: str | None = None,
    tag_priority: Sequence[str] = TAG_PRIORITY,
    fan_out: bool = False,
) -> list[Project]:
    """
    Run every stage and return the ordered results.

    Args:
        projects: The full project list
        selected_filters: Currently selected filters (may be empty)
        title_substring: Title search text (empty or None disables it)
        tag_priority: Priority tags, highest priority first
        fan_out: Use the legacy fan-out bucketing

    Returns:
        Projects grouped by bucket, each bucket sorted by name
    """
    metrics = PipelineMetrics(total_projects=len(projects))

    filtered = apply_tag_filters(projects, selected_filters)
    metrics.after_tag_filter = len(filtered)

    searched = apply_title_search_filter(filtered, title_substring)
    metrics.after_title_filter = len(searched)

    buckets = split_into_buckets(searched, tag_priority, fan_out=fan_out)
    metrics.bucket_sizes = {tag: len(bucket) for tag, bucket in buckets.items()}

    results = apply_sort(buckets, tag_priority)
    metrics.final_result_size = len(results)

    # Record metrics
    _metrics_history.append(metrics)

    logger.info(
        "pipeline_run",
        extra={
            "total": metrics.total_projects,
            "after_tag_filter": metrics.after_tag_filter,
            "after_title_filter": metrics.after_title_filter,
            "buckets": metrics.bucket_sizes,
            "final": metrics.final_result_size,
        },
    )

    return results
