from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from schoolorg.models.org_unit import OrgUnit


class OrgUnitRepo(Protocol):
    async def get_by_id(self, org_unit_id: str) -> OrgUnit | None: ...
    async def add(self, org_unit: OrgUnit) -> None: ...
    async def list_roots(self) -> list[OrgUnit]: ...
    async def list_subtrees(self, org_unit_ids: Iterable[str]) -> list[OrgUnit]: ...


class InMemoryOrgUnitRepo:
    def __init__(self) -> None:
        self._by_id: dict[str, OrgUnit] = {}

    async def get_by_id(self, org_unit_id: str) -> OrgUnit | None:
        return self._by_id.get(org_unit_id)

    async def add(self, org_unit: OrgUnit) -> None:
        if org_unit.id in self._by_id:
            raise ValueError("org unit id already exists")
        self._by_id[org_unit.id] = org_unit

    async def list_roots(self) -> list[OrgUnit]:
        return [u for u in self._by_id.values() if u.parent_id is None]

    async def list_subtrees(self, org_unit_ids: Iterable[str]) -> list[OrgUnit]:
        """Return every node that is one of ``org_unit_ids`` or sits below one."""
        wanted = set(org_unit_ids)
        if not wanted:
            return []
        return [
            u
            for u in self._by_id.values()
            if u.id in wanted or not wanted.isdisjoint(u.ancestors)
        ]
