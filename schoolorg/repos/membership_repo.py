from __future__ import annotations

from typing import Protocol

from schoolorg.models.membership import Membership
from schoolorg.services.errors import MembershipAlreadyExistsError


class MembershipRepo(Protocol):
    async def get(self, user_id: str, org_unit_id: str) -> Membership | None: ...
    async def add(self, membership: Membership) -> None: ...
    async def remove(self, user_id: str, org_unit_id: str) -> bool: ...
    async def list_by_user(self, user_id: str) -> list[Membership]: ...
    async def list_by_org_unit(self, org_unit_id: str) -> list[Membership]: ...


class InMemoryMembershipRepo:
    def __init__(self) -> None:
        self._store: dict[tuple[str, str], Membership] = {}

    async def get(self, user_id: str, org_unit_id: str) -> Membership | None:
        return self._store.get((user_id, org_unit_id))

    async def add(self, membership: Membership) -> None:
        key = (membership.user_id, membership.org_unit_id)
        if key in self._store:
            raise MembershipAlreadyExistsError(*key)
        self._store[key] = membership

    async def remove(self, user_id: str, org_unit_id: str) -> bool:
        return self._store.pop((user_id, org_unit_id), None) is not None

    async def list_by_user(self, user_id: str) -> list[Membership]:
        return [m for m in self._store.values() if m.user_id == user_id]

    async def list_by_org_unit(self, org_unit_id: str) -> list[Membership]:
        return [m for m in self._store.values() if m.org_unit_id == org_unit_id]
