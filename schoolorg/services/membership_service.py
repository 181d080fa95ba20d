from __future__ import annotations

import logging

from schoolorg.core.metrics import MEMBERSHIP_OPERATIONS
from schoolorg.db.registry import Registry
from schoolorg.models.membership import ROLES, Membership
from schoolorg.repos.membership_repo import MembershipRepo
from schoolorg.services.errors import (
    MembershipAlreadyExistsError,
    MembershipValidationError,
    OrgUnitNotFoundError,
)

logger = logging.getLogger(__name__)


def normalize_role(role: str) -> str:
    role = role.strip().lower()
    if role not in ROLES:
        raise MembershipValidationError(
            f"role must be one of {'|'.join(ROLES)} (got {role!r})"
        )
    return role


def _require(field_name: str, value: str) -> str:
    value = value.strip()
    if not value:
        raise MembershipValidationError(f"{field_name} must be non-empty")
    return value


async def create_membership(
    registry: Registry,
    *,
    user_id: str,
    org_unit_id: str,
    role: str,
) -> Membership:
    """Assign ``role`` to ``user_id`` within ``org_unit_id``.

    The org unit must exist.  A user holds at most one membership per
    org unit, so a second one for the same pair is a conflict.
    """
    try:
        user_id = _require("user_id", user_id)
        org_unit_id = _require("org_unit_id", org_unit_id)
        role = normalize_role(role)
    except MembershipValidationError as e:
        logger.warning("Rejected membership payload: %s", e)
        raise

    if await registry.org_units.get_by_id(org_unit_id) is None:
        logger.warning(
            "Rejected membership: unknown org_unit_id=%s",
            org_unit_id,
            extra={"user_id": user_id, "org_unit_id": org_unit_id},
        )
        raise OrgUnitNotFoundError(org_unit_id)

    if await registry.memberships.get(user_id, org_unit_id) is not None:
        logger.warning(
            "Rejected duplicate membership user=%s org_unit=%s", user_id, org_unit_id
        )
        raise MembershipAlreadyExistsError(user_id, org_unit_id)

    membership = Membership(user_id=user_id, org_unit_id=org_unit_id, role=role)
    await registry.memberships.add(membership)

    MEMBERSHIP_OPERATIONS.labels(operation="created").inc()
    logger.info(
        "Created membership user=%s org_unit=%s role=%s",
        user_id,
        org_unit_id,
        role,
        extra={"user_id": user_id, "org_unit_id": org_unit_id},
    )
    return membership


async def delete_membership(
    repo: MembershipRepo, *, user_id: str, org_unit_id: str
) -> bool:
    """Remove the membership for the pair, whatever its role.

    Deleting a pair that has no membership is a no-op.  Returns whether a
    record was actually removed.
    """
    removed = await repo.remove(user_id.strip(), org_unit_id.strip())
    MEMBERSHIP_OPERATIONS.labels(operation="deleted" if removed else "noop_delete").inc()
    logger.info(
        "Delete membership user=%s org_unit=%s removed=%s",
        user_id,
        org_unit_id,
        removed,
    )
    return removed


async def list_memberships(
    repo: MembershipRepo,
    *,
    user_id: str | None = None,
    org_unit_id: str | None = None,
) -> list[Membership]:
    user_id = (user_id or "").strip() or None
    org_unit_id = (org_unit_id or "").strip() or None

    if user_id is None and org_unit_id is None:
        raise MembershipValidationError("user_id or org_unit_id is required")

    if user_id is not None:
        memberships = await repo.list_by_user(user_id)
        if org_unit_id is not None:
            memberships = [m for m in memberships if m.org_unit_id == org_unit_id]
        return memberships

    return await repo.list_by_org_unit(org_unit_id)  # type: ignore[arg-type]
