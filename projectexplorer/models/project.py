"""
Project and filter records.

Projects are owned by the project catalog and are read-only to the
filter pipeline. Filters are hashable so a selection can be held in a set.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum


class FilterDimension(str, Enum):
    """
    Attribute axes a project can be filtered on.

    Declaration order is the order in which the tag filter checks
    dimensions.
    """

    CATEGORY = "category"
    LANGUAGE = "language"
    PLATFORM = "platform"
    LICENSE = "license"

    @classmethod
    def parse(cls, raw: "FilterDimension | str") -> "FilterDimension | None":
        """Resolve a raw dimension name, or None if it is not a known axis."""
        try:
            return cls(raw)
        except ValueError:
            return None


@dataclass(frozen=True)
class Filter:
    """
    A selected value on one dimension.

    Two filters with the same dimension and value are the same selection.
    """

    dimension: FilterDimension | str
    value: str


@dataclass
class Project:
    """
    A project listed in the explorer.

    `attributes` maps a dimension to the project's values on that axis.
    A dimension missing from the mapping never matches a filter.
    """

    name: str
    tags: list[str] | None = None
    attributes: dict[FilterDimension, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Accept plain string keys; unknown axes are a construction error
        self.attributes = {FilterDimension(key): values for key, values in self.attributes.items()}

    def values_for(self, dimension: FilterDimension) -> Sequence[str] | None:
        """Get this project's values on a dimension, or None if absent."""
        return self.attributes.get(dimension)

    def has_tags(self) -> bool:
        """An empty tag list counts as untagged."""
        return bool(self.tags)
