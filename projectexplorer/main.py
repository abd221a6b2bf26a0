import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from projectexplorer.api import filters_router, health_router, results_router
from projectexplorer.api.dependencies import get_state, get_watcher
from projectexplorer.config import settings
from projectexplorer.models.failure import KnownError
from projectexplorer.services.project_catalog import load_project_catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    if settings.projects_file:
        get_state().set_projects(load_project_catalog(settings.projects_file))
    else:
        logger.warning("PROJECTS_FILE is not set; starting with an empty project list")

    # Publish initial results so GET /results is never stale on startup
    get_watcher().apply_filters()
    yield
    await get_watcher().aclose()


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    version=pkg_version("projectexplorer"),
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Explain known failures instead of returning a raw 500."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_detail().model_dump(mode="json"),
    )


app.include_router(filters_router)
app.include_router(health_router)
app.include_router(results_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
