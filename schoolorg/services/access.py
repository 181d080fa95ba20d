"""Org-unit authorization.

Routes ask an injected OrgUnitAuthorizer whether the caller may act on a
unit.  ``org_unit_id=None`` stands for the top of the tree (creating a
root), which only platform admins may touch under coverage rules.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from schoolorg.db.registry import Registry
from schoolorg.models.principal import Principal
from schoolorg.services.hierarchy_service import covered_org_unit_ids

logger = logging.getLogger(__name__)


class OrgUnitAuthorizer(Protocol):
    async def authorize(self, principal: Principal, org_unit_id: str | None) -> bool: ...

    async def authorize_many(
        self, principal: Principal, org_unit_ids: Iterable[str]
    ) -> set[str]:
        """Return the subset of ``org_unit_ids`` the principal may act on."""
        ...


class AllowAllAuthorizer:
    async def authorize(self, principal: Principal, org_unit_id: str | None) -> bool:
        return True

    async def authorize_many(
        self, principal: Principal, org_unit_ids: Iterable[str]
    ) -> set[str]:
        return set(org_unit_ids)


class CoverageAuthorizer:
    """A user may act on every unit they belong to and everything below it."""

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    async def authorize(self, principal: Principal, org_unit_id: str | None) -> bool:
        if principal.is_platform_admin():
            return True
        if org_unit_id is None:
            return False
        covered = await covered_org_unit_ids(self._registry, principal.user_id)
        allowed = org_unit_id in covered
        if not allowed:
            logger.debug(
                "user=%s covers %d units, not org_unit=%s",
                principal.user_id,
                len(covered),
                org_unit_id,
            )
        return allowed

    async def authorize_many(
        self, principal: Principal, org_unit_ids: Iterable[str]
    ) -> set[str]:
        wanted = set(org_unit_ids)
        if not wanted or principal.is_platform_admin():
            return wanted
        return wanted & await covered_org_unit_ids(self._registry, principal.user_id)


def build_authorizer(auth_required: bool, registry: Registry) -> OrgUnitAuthorizer:
    if auth_required:
        return CoverageAuthorizer(registry)
    return AllowAllAuthorizer()
