"""FastAPI application entry point with lifespan management."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from paywise import __version__
from paywise.api import (
    admin_router,
    affiliates_router,
    budgets_router,
    calculators_router,
    health_router,
    leads_router,
    receipts_router,
    transactions_router,
    users_router,
)
from paywise.api.middleware import RequestContextMiddleware
from paywise.core.config import settings
from paywise.core.database import create_all_tables, create_engine, create_session_factory
from paywise.core.logging import configure_logging, get_logger
from paywise.core.redis import create_redis_pool
from paywise.core.sentry import init_sentry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle resources.

    Startup:
        - Configure structured logging
        - Initialize Sentry error tracking
        - Create database engine and session factory (and tables, if enabled)
        - Establish Redis connection pool

    Shutdown:
        - Close Redis connections
        - Dispose database engine
    """
    configure_logging()
    logger.info(
        "application_starting",
        environment=settings.environment,
        tax_year=settings.tax_year,
    )

    if init_sentry():
        logger.info("sentry_initialized", environment=settings.environment)

    app.state.db_engine = create_engine()
    app.state.async_session = create_session_factory(app.state.db_engine)
    if settings.database_auto_create:
        await create_all_tables(app.state.db_engine)
        logger.info("database_tables_created")
    logger.info("database_engine_created")

    app.state.redis = await create_redis_pool()
    logger.info("redis_pool_created")

    yield

    logger.info("application_stopping")

    await app.state.redis.aclose()
    logger.info("redis_pool_closed")

    await app.state.db_engine.dispose()
    logger.info("database_engine_disposed")


app = FastAPI(
    title="Paywise",
    description="Paycheck, budget, loan and expense calculators for everyday finances",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestContextMiddleware)

app.include_router(health_router)
app.include_router(users_router)
app.include_router(calculators_router)
app.include_router(budgets_router)
app.include_router(transactions_router)
app.include_router(receipts_router)
app.include_router(leads_router)
app.include_router(affiliates_router)
app.include_router(admin_router)
