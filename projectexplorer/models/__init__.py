from projectexplorer.models.failure import FailureDetail, FailureKind, KnownError
from projectexplorer.models.project import Filter, FilterDimension, Project

__all__ = [
    "FailureDetail",
    "FailureKind",
    "Filter",
    "FilterDimension",
    "KnownError",
    "Project",
]
