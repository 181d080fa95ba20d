"""Health and readiness endpoints.

  /health (liveness): is the process alive?  Always 200; the ``status``
    field says "degraded" when a configured dependency is unreachable.
  /ready (readiness): can this instance serve traffic?  503 when the
    database is configured but does not answer, so the load balancer
    stops routing here without restarting the container.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from schoolorg.api.dependencies import get_registry
from schoolorg.db import engine as db_engine
from schoolorg.db.registry import Registry

router = APIRouter(tags=["health"])


async def _database_check() -> str:
    if db_engine.engine is None:
        return "not_configured"
    return "ok" if await db_engine.ping_database() else "degraded"


@router.get("/health")
async def health(registry: Annotated[Registry, Depends(get_registry)]) -> dict:
    checks = {"database": await _database_check()}
    overall = "degraded" if "degraded" in checks.values() else "ok"
    return {
        "status": overall,
        "store": registry.backend,
        "checks": checks,
    }


@router.get("/ready")
async def ready() -> Response:
    if await _database_check() == "degraded":
        return Response(status_code=503)
    return Response(status_code=200)
