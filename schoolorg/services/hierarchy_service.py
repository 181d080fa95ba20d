"""Org-unit tree maintenance.

Nodes carry a materialized ancestor path that is written once, at
creation.  Reads never walk the tree: "X and everything below X" is a
single filter on ``id == X or X in ancestors``.
"""

from __future__ import annotations

import logging

from schoolorg.core.metrics import ORG_UNITS_CREATED
from schoolorg.db.registry import Registry
from schoolorg.models.org_unit import OrgUnit
from schoolorg.repos.org_unit_repo import OrgUnitRepo
from schoolorg.services.errors import OrgUnitNotFoundError, OrgUnitValidationError

logger = logging.getLogger(__name__)


async def create_node(
    repo: OrgUnitRepo,
    *,
    name: str,
    parent_id: str | None = None,
    strict_parent: bool = True,
) -> OrgUnit:
    """Create and persist a node under ``parent_id`` (or as a root).

    An unknown ``parent_id`` raises OrgUnitNotFoundError unless
    ``strict_parent`` is False, in which case the node becomes a root.
    """
    name = name.strip()
    if not name:
        logger.warning("Rejected org unit with blank name")
        raise OrgUnitValidationError("name must be non-empty")

    parent: OrgUnit | None = None
    parent_id = (parent_id or "").strip() or None
    if parent_id is not None:
        parent = await repo.get_by_id(parent_id)
        if parent is None:
            if strict_parent:
                logger.warning("Rejected org unit: unknown parent_id=%s", parent_id)
                raise OrgUnitNotFoundError(parent_id)
            logger.warning(
                "Unknown parent_id=%s, creating %r as a root", parent_id, name
            )

    node = OrgUnit.new(name=name, parent=parent)
    await repo.add(node)

    ORG_UNITS_CREATED.labels(kind="root" if node.is_root else "child").inc()
    logger.info(
        "Created org unit id=%s parent=%s depth=%d",
        node.id,
        node.parent_id,
        node.depth,
        extra={"org_unit_id": node.id},
    )
    return node


async def get_node(repo: OrgUnitRepo, org_unit_id: str) -> OrgUnit:
    node = await repo.get_by_id(org_unit_id)
    if node is None:
        raise OrgUnitNotFoundError(org_unit_id)
    return node


async def list_roots(repo: OrgUnitRepo) -> list[OrgUnit]:
    return await repo.list_roots()


async def find_descendants(repo: OrgUnitRepo, org_unit_id: str) -> list[OrgUnit]:
    """Return the node itself plus every node below it.

    An unknown id is not an error: the filter simply matches nothing.
    """
    return await repo.list_subtrees([org_unit_id])


async def covered_org_unit_ids(registry: Registry, user_id: str) -> set[str]:
    """Ids of every unit the user is a member of, plus all their descendants."""
    memberships = await registry.memberships.list_by_user(user_id)
    unit_ids = {m.org_unit_id for m in memberships}
    if not unit_ids:
        return set()
    nodes = await registry.org_units.list_subtrees(unit_ids)
    return {n.id for n in nodes}
