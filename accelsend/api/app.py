"""FastAPI application serving files with sendfile offload."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from accelsend._version import __version__
from accelsend.api.routers.files import create_files_router
from accelsend.api.routing import SendfileOptions
from accelsend.config.settings import Settings, get_settings
from accelsend.core.logging import get_logger, setup_logging


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    options: SendfileOptions = app.state.sendfile_options
    logger.info(
        "server_starting",
        url=settings.server_url,
        files_root=str(settings.files.root),
        variation=options.variation.value if options.variation else None,
        mappings=str(options.mappings) or None,
    )

    yield

    logger.info("server_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        # Factory mode (uvicorn --reload): this process configures its own logging
        settings = get_settings()
        setup_logging(
            json_logs=settings.logging.format == "json",
            log_level_name=settings.logging.level,
            log_file=settings.logging.file,
        )

    options = SendfileOptions.from_settings(settings.sendfile)

    app = FastAPI(
        title="accelsend",
        description="File server that offloads transfers to X-Sendfile / X-Accel-Redirect proxies",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.sendfile_options = options

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "service": "accelsend"}

    app.include_router(
        create_files_router(settings.files.root, options), prefix="/files"
    )

    return app
