from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from schoolorg.api.health import router as health_router
from schoolorg.api.memberships import router as memberships_router
from schoolorg.api.metrics_endpoint import router as metrics_router
from schoolorg.api.org_units import router as org_units_router
from schoolorg.core.config import SETTINGS
from schoolorg.core.logging import setup_logging
from schoolorg.db.engine import async_session_factory, lifespan_db
from schoolorg.db.registry import build_registry
from schoolorg.middleware.metrics import MetricsMiddleware
from schoolorg.middleware.request_context import RequestContextMiddleware
from schoolorg.services.access import build_authorizer

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    async with lifespan_db():
        yield


app = FastAPI(
    title="schoolorg",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

# Built once per process; routes reach these through app.state.
registry = build_registry(async_session_factory)
app.state.registry = registry
app.state.authorizer = build_authorizer(SETTINGS.auth_required, registry)
app.state.auth_required = SETTINGS.auth_required
app.state.strict_parent = SETTINGS.strict_parent

# Middleware execution order: last-added runs first (outermost layer).
# RequestContext (outermost) → Metrics → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(org_units_router)
app.include_router(memberships_router)

logger.info(
    "schoolorg started  env=%s log_level=%s port=%d store=%s auth=%s strict_parent=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    registry.backend,
    SETTINGS.auth_mode,
    SETTINGS.strict_parent,
)
