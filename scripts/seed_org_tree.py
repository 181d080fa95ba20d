"""Seed a sample org tree and memberships.

Tree: University -> Engineering College -> Computer Science Dept -> CS-101 Class

Run with:
    DATABASE_URL=postgresql+asyncpg://... python scripts/seed_org_tree.py

Without DATABASE_URL the seed runs against a throwaway in-memory store,
which is only useful to see the resulting ids and paths.
"""

from __future__ import annotations

import asyncio
import logging

from schoolorg.core.config import SETTINGS
from schoolorg.core.logging import setup_logging
from schoolorg.db.engine import async_session_factory, engine
from schoolorg.db.registry import Registry, build_registry
from schoolorg.services import hierarchy_service, membership_service

logger = logging.getLogger("seed")

# (user_id, unit name, role)
SAMPLE_MEMBERSHIPS = [
    ("admin@x.com", "University", "admin"),
    ("head@x.com", "Computer Science Dept", "head"),
    ("t@x.com", "CS-101 Class", "teacher"),
    ("s@x.com", "CS-101 Class", "student"),
]


async def seed(registry: Registry) -> dict[str, str]:
    """Create the sample tree and memberships. Returns unit name -> id."""
    ids: dict[str, str] = {}
    parent_id: str | None = None
    for name in (
        "University",
        "Engineering College",
        "Computer Science Dept",
        "CS-101 Class",
    ):
        node = await hierarchy_service.create_node(
            registry.org_units, name=name, parent_id=parent_id
        )
        ids[name] = node.id
        parent_id = node.id
        logger.info("%-22s id=%s ancestors=%s", name, node.id, list(node.ancestors))

    for user_id, unit_name, role in SAMPLE_MEMBERSHIPS:
        await membership_service.create_membership(
            registry, user_id=user_id, org_unit_id=ids[unit_name], role=role
        )
        logger.info("%-12s %-8s @ %s", user_id, role, unit_name)

    return ids


async def main() -> None:
    registry = build_registry(async_session_factory)
    try:
        await seed(registry)
    finally:
        if engine is not None:
            await engine.dispose()
    logger.info("Seed done (store=%s)", registry.backend)


if __name__ == "__main__":
    setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
    asyncio.run(main())
