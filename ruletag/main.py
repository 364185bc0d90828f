"""ruletag API: application factory and router wiring."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from ruletag import __version__
from ruletag.config import settings
from ruletag.core.database import async_session_factory, engine
from ruletag.core.logging import configure_logging
from ruletag.core.middleware import RequestLoggingMiddleware

configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("ruletag_starting", env=settings.app_env, version=__version__)
    yield
    await engine.dispose()
    logger.info("ruletag_stopped")


app = FastAPI(
    title="ruletag API",
    description="Rule-based transaction categorization: rules, bulk assignment, retagging and conflict reports",
    version=__version__,
    lifespan=lifespan,
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── System ─────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check():
    """Liveness probe."""
    return {"status": "healthy", "version": __version__, "env": settings.app_env}


@app.get("/ready", tags=["system"])
async def readiness_check():
    """Readiness probe: the rule store must answer a trivial query."""
    try:
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("readiness_failed", error=str(e))
        return {"status": "degraded", "checks": {"database": f"error: {e}"}}
    return {"status": "ready", "checks": {"database": "ok"}}


# ── API v1 ─────────────────────────────────────────
from ruletag.api.v1 import admin, reports, rules, transactions  # noqa: E402

for module, prefix in (
    (rules, "rules"),
    (transactions, "transactions"),
    (admin, "admin"),
    (reports, "reports"),
):
    app.include_router(module.router, prefix=f"/api/v1/{prefix}", tags=[prefix])
