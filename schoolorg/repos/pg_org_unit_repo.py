"""PostgreSQL implementation of OrgUnitRepo."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from schoolorg.db.tables import OrgUnitRow
from schoolorg.models.org_unit import OrgUnit
from schoolorg.repos.pg_session import transaction


class PgOrgUnitRepo:
    """Satisfies the OrgUnitRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_by_id(self, org_unit_id: str) -> OrgUnit | None:
        async with transaction(self._session_factory) as session:
            row = await session.get(OrgUnitRow, org_unit_id)
            return _row_to_org_unit(row) if row is not None else None

    async def add(self, org_unit: OrgUnit) -> None:
        async with transaction(self._session_factory) as session:
            session.add(
                OrgUnitRow(
                    id=org_unit.id,
                    name=org_unit.name,
                    parent_id=org_unit.parent_id,
                    ancestors=list(org_unit.ancestors),
                    created_at=org_unit.created_at,
                )
            )

    async def list_roots(self) -> list[OrgUnit]:
        stmt = select(OrgUnitRow).where(OrgUnitRow.parent_id.is_(None))
        async with transaction(self._session_factory) as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [_row_to_org_unit(r) for r in rows]

    async def list_subtrees(self, org_unit_ids: Iterable[str]) -> list[OrgUnit]:
        ids = list(dict.fromkeys(org_unit_ids))
        if not ids:
            return []
        # One query: the nodes themselves, or any node whose path overlaps them
        stmt = select(OrgUnitRow).where(
            or_(OrgUnitRow.id.in_(ids), OrgUnitRow.ancestors.overlap(ids))
        )
        async with transaction(self._session_factory) as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [_row_to_org_unit(r) for r in rows]


def _row_to_org_unit(row: OrgUnitRow) -> OrgUnit:
    return OrgUnit(
        id=row.id,
        name=row.name,
        parent_id=row.parent_id,
        ancestors=tuple(row.ancestors) if row.ancestors else (),
        created_at=row.created_at,
    )
