"""
HTTP entry point for the ledger.

    uvicorn billventory.api.main:app

Startup brings the schema up to date before the first request is served;
a migration that fails keeps the process from starting at all.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from billventory import __version__
from billventory.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from billventory.api.middleware.error_handler import setup_exception_handlers
from billventory.api.routes import (
    health_router,
    inventory_router,
    reports_router,
    transactions_router,
)
from billventory.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)

ROUTERS = (health_router, transactions_router, inventory_router, reports_router)


async def _prepare_database() -> None:
    from billventory.infrastructure.storage.sqlite import get_connection_pool
    from billventory.infrastructure.storage.sqlite.migrations.migrator import run_migrations

    results = await run_migrations()
    for result in results:
        if not result.success:
            raise RuntimeError(f"Migration v{result.version} failed: {result.error}")

    await get_connection_pool()
    logger.info("storage_ready", migrations_applied=len(results))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger.info(
        "ledger_api_starting",
        host=settings.api.host,
        port=settings.api.port,
        recompute_on_edit=settings.ledger.recompute_on_edit,
    )

    try:
        await _prepare_database()
    except Exception as e:
        logger.error("storage_startup_failed", error=str(e))
        raise

    if settings.seed_demo_data:
        from billventory.application.use_cases import SeedDemoDataUseCase

        seeded = await SeedDemoDataUseCase().execute()
        logger.info("demo_data_checked", seeded=seeded)

    yield

    from billventory.infrastructure.storage.sqlite import close_connection_pool

    try:
        await close_connection_pool()
    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))
    logger.info("ledger_api_stopped")


def create_app() -> FastAPI:
    """Build the API: middleware, error handlers and the ledger routers."""
    settings = get_settings()
    configure_logging()

    docs_enabled = settings.api.debug
    app = FastAPI(
        title="Billventory API",
        description="Purchase and sales ledger with weighted-average-cost inventory",
        version=__version__,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def root_health() -> dict[str, str]:
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    api = get_settings().api
    uvicorn.run("billventory.api.main:app", host=api.host, port=api.port, reload=api.debug)
