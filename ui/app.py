"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import load_config
from core.health import HealthChecker, check_event_loop, create_generator_check
from idgen.generator import IdGenerator
from internal.logging import get_logger, LogLevel, StructuredLogger
from ui.routes import control, health, ids


def create_app(config=None):
    """Create and configure the FastAPI application."""
    config = config or load_config()

    # Configure structured logging
    StructuredLogger.configure(min_level=LogLevel.parse(config.logging.level, LogLevel.INFO))
    logger_instance = get_logger()

    # Create core components
    generator = IdGenerator(pool_blocks=config.generator.pool_blocks)
    health_checker = HealthChecker()
    health_checker.register("event_loop", check_event_loop, critical=True)
    health_checker.register("generator", create_generator_check(generator), critical=True)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger_instance.info("Application starting", version="1.0.0")
        yield
        logger_instance.info("Application shutdown complete", **generator.get_stats())

    app = FastAPI(
        title="Time ID",
        version="1.0.0",
        description="k-sortable unique identifier service",
        lifespan=lifespan,
    )
    app.state.generator = generator

    # Initialize route modules with dependencies
    ids.init(generator, config.server.max_batch)
    control.init(generator)
    health.init(generator, health_checker)

    # Include routers
    app.include_router(ids.router)
    app.include_router(control.router)
    app.include_router(health.router)

    return app
