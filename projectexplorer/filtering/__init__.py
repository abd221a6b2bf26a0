"""
Result filtering for the project explorer.

Turns the project list plus the user's filter state into the ordered
list shown on screen.
"""

from projectexplorer.filtering.pipeline import (
    TAG_PRIORITY,
    UNTAGGED_KEY,
    PipelineMetrics,
    ResultsBuckets,
    apply_sort,
    apply_tag_filters,
    apply_title_search_filter,
    get_pipeline_metrics,
    reset_pipeline_metrics,
    run_pipeline,
    split_into_buckets,
)

__all__ = [
    "TAG_PRIORITY",
    "UNTAGGED_KEY",
    "PipelineMetrics",
    "ResultsBuckets",
    "apply_sort",
    "apply_tag_filters",
    "apply_title_search_filter",
    "get_pipeline_metrics",
    "reset_pipeline_metrics",
    "run_pipeline",
    "split_into_buckets",
]
