import pytest

from projectexplorer.api.dependencies import reset_explorer
from projectexplorer.filtering.pipeline import reset_pipeline_metrics
from projectexplorer.models.project import Project


@pytest.fixture(autouse=True)
def clear_shared_state():
    """Reset pipeline metrics and the API's shared explorer between tests."""
    reset_pipeline_metrics()
    reset_explorer()
    yield
    reset_pipeline_metrics()
    reset_explorer()


@pytest.fixture
def sample_projects() -> list[Project]:
    """A small catalog covering every bucket and dimension."""
    return [
        Project(
            name="Vulkan-Samples",
            tags=["Khronos Official"],
            attributes={
                "category": ["Sample"],
                "language": ["C++"],
                "platform": ["Windows", "Linux"],
            },
        ),
        Project(
            name="glslang",
            tags=["Khronos Official", "Staff Picks"],
            attributes={"category": ["Shader", "Tool"], "language": ["C++"]},
        ),
        Project(
            name="awesome-vulkan",
            tags=["Staff Picks"],
            attributes={"category": ["Resource"]},
        ),
        Project(
            name="SPIRV-Cross",
            tags=["Community"],
            attributes={"category": ["Shader"], "language": ["C++", "Python"]},
        ),
        Project(
            name="bgfx",
            attributes={"category": ["Engine"], "language": ["C++"], "license": ["BSD-2-Clause"]},
        ),
    ]
