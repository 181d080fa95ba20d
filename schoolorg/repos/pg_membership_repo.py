"""PostgreSQL implementation of MembershipRepo."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from schoolorg.db.tables import MembershipRow
from schoolorg.models.membership import Membership
from schoolorg.repos.pg_session import transaction
from schoolorg.services.errors import MembershipAlreadyExistsError

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class PgMembershipRepo:
    """Satisfies the MembershipRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, user_id: str, org_unit_id: str) -> Membership | None:
        async with transaction(self._session_factory) as session:
            row = await session.get(MembershipRow, (user_id, org_unit_id))
            return _row_to_membership(row) if row is not None else None

    async def add(self, membership: Membership) -> None:
        async with transaction(self._session_factory) as session:
            session.add(
                MembershipRow(
                    user_id=membership.user_id,
                    org_unit_id=membership.org_unit_id,
                    role=membership.role,
                    created_at=membership.created_at,
                )
            )
            try:
                await session.flush()
            except IntegrityError as e:
                if not _is_unique_violation(e):
                    raise
                raise MembershipAlreadyExistsError(
                    membership.user_id, membership.org_unit_id
                ) from None

    async def remove(self, user_id: str, org_unit_id: str) -> bool:
        stmt = delete(MembershipRow).where(
            MembershipRow.user_id == user_id,
            MembershipRow.org_unit_id == org_unit_id,
        )
        async with transaction(self._session_factory) as session:
            result = await session.execute(stmt)
            return result.rowcount > 0

    async def list_by_user(self, user_id: str) -> list[Membership]:
        stmt = select(MembershipRow).where(MembershipRow.user_id == user_id)
        async with transaction(self._session_factory) as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [_row_to_membership(r) for r in rows]

    async def list_by_org_unit(self, org_unit_id: str) -> list[Membership]:
        stmt = select(MembershipRow).where(MembershipRow.org_unit_id == org_unit_id)
        async with transaction(self._session_factory) as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [_row_to_membership(r) for r in rows]


def _is_unique_violation(error: IntegrityError) -> bool:
    """True for a primary-key/unique clash; false for FK or NOT NULL failures."""
    return getattr(error.orig, "sqlstate", None) == UNIQUE_VIOLATION


def _row_to_membership(row: MembershipRow) -> Membership:
    return Membership(
        user_id=row.user_id,
        org_unit_id=row.org_unit_id,
        role=row.role,
        created_at=row.created_at,
    )
