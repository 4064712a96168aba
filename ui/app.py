"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

import ashid
from config import load_config
from core.errors import DomainError
from core.health import get_health_checker, check_codec, check_random_source
from internal.logging import get_logger, LogLevel, StructuredLogger
from utils.crash import create_async_handler
from ui.routes import ids, health


def create_app(config=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    StructuredLogger.configure(min_level=LogLevel.from_name(config.logging.level))
    logger_instance = get_logger()

    health_checker = get_health_checker()
    health_checker.register("codec", check_codec, critical=True)
    health_checker.register("random_source", check_random_source, critical=False)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger_instance.info("Application starting", version=ashid.__version__)
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(create_async_handler(logger_instance))
        yield
        logger_instance.info("Application shutdown complete", **ids.get_stats())

    app = FastAPI(
        title="Ashid",
        version=ashid.__version__,
        description="time-sortable unique identifier service",
        lifespan=lifespan,
    )

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        logger_instance.debug("Rejected request", path=request.url.path, error=exc)
        return JSONResponse(status_code=422, content=exc.to_dict())

    ids.init(config.generator)
    health.init(health_checker)

    app.include_router(ids.router)
    app.include_router(health.router)

    return app
