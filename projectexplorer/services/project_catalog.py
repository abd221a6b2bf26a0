"""
Project catalog loader.

Reads the read-only project list shown by the explorer from a JSON file.

Accepted shapes:
- A JSON array of project objects
- A JSON object with a "projects" array

Each project object has a "name", optional "tags", and an optional value
list per filter dimension ("category", "language", "platform", "license").
Unknown keys are ignored.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from projectexplorer.models.failure import FailureKind, KnownError
from projectexplorer.models.project import FilterDimension, Project

logger = logging.getLogger(__name__)


class ProjectCatalogError(KnownError):
    """Raised when a project catalog cannot be loaded."""

    def __init__(self, kind: FailureKind, message: str, detail: str | None = None):
        super().__init__(
            kind=kind,
            message=message,
            detail=detail,
            suggestion="Check the PROJECTS_FILE setting and the catalog contents.",
            status_code=404 if kind == FailureKind.NOT_FOUND else 400,
        )


class ProjectRecord(BaseModel):
    """One project entry as it appears in the catalog file."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    tags: list[str] | None = None
    category: list[str] | None = None
    language: list[str] | None = None
    platform: list[str] | None = None
    license: list[str] | None = None

    def to_project(self) -> Project:
        attributes: dict[FilterDimension, list[str]] = {}
        for dimension in FilterDimension:
            values = getattr(self, dimension.value)
            if values is not None:
                attributes[dimension] = list(values)

        return Project(
            name=self.name,
            tags=list(self.tags) if self.tags is not None else None,
            attributes=attributes,
        )


def parse_project_catalog(data: Any) -> list[Project]:
    """
    Convert decoded catalog JSON into projects, preserving file order.

    Raises:
        ProjectCatalogError: If the data is not a valid catalog
    """
    if isinstance(data, dict):
        if "projects" not in data:
            raise ProjectCatalogError(
                FailureKind.INVALID_INPUT,
                "Project catalog object has no 'projects' list.",
            )
        data = data["projects"]

    if not isinstance(data, list):
        raise ProjectCatalogError(
            FailureKind.INVALID_INPUT,
            "Project catalog must be a list of projects.",
            detail=f"Got {type(data).__name__}",
        )

    projects: list[Project] = []
    for index, raw in enumerate(data):
        try:
            record = ProjectRecord.model_validate(raw)
        except ValidationError as e:
            raise ProjectCatalogError(
                FailureKind.INVALID_INPUT,
                f"Project #{index} in the catalog is malformed.",
                detail=str(e),
            ) from e
        projects.append(record.to_project())

    return projects


def load_project_catalog(path: str | Path) -> list[Project]:
    """
    Load the project catalog from a JSON file.

    Raises:
        ProjectCatalogError: If the file is missing or malformed
    """
    catalog_path = Path(path)
    if not catalog_path.exists():
        raise ProjectCatalogError(
            FailureKind.NOT_FOUND,
            "Project catalog file not found.",
            detail=str(catalog_path),
        )

    try:
        with open(catalog_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ProjectCatalogError(
            FailureKind.INVALID_INPUT,
            "Project catalog is not valid JSON.",
            detail=f"{catalog_path}: {e}",
        ) from e

    projects = parse_project_catalog(data)
    logger.info("Loaded %d projects from %s", len(projects), catalog_path)
    return projects
