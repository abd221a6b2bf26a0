"""Request and response models shared by the explorer endpoints."""

from pydantic import BaseModel, Field

from projectexplorer.models.project import Filter, FilterDimension, Project


class FilterModel(BaseModel):
    """A filter as sent and returned by the API."""

    dimension: FilterDimension = Field(
        ...,
        description="Attribute axis the filter applies to",
        examples=["category"],
    )
    value: str = Field(..., description="Value to match", examples=["Shader"])

    def to_filter(self) -> Filter:
        return Filter(dimension=self.dimension, value=self.value)

    @classmethod
    def from_filter(cls, selected: Filter) -> "FilterModel":
        return cls(dimension=FilterDimension(selected.dimension), value=selected.value)


class ProjectModel(BaseModel):
    """A project in the results list."""

    name: str
    tags: list[str] | None = None
    attributes: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def from_project(cls, project: Project) -> "ProjectModel":
        return cls(
            name=project.name,
            tags=project.tags,
            attributes={dim.value: values for dim, values in project.attributes.items()},
        )
