"""Repository registry.

One Registry is built at process start and stored on ``app.state``.
Routes receive it through the ``get_registry`` dependency, so there is
no module-level repo singleton to look up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from schoolorg.repos.membership_repo import InMemoryMembershipRepo, MembershipRepo
from schoolorg.repos.org_unit_repo import InMemoryOrgUnitRepo, OrgUnitRepo
from schoolorg.repos.pg_membership_repo import PgMembershipRepo
from schoolorg.repos.pg_org_unit_repo import PgOrgUnitRepo

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Registry:
    org_units: OrgUnitRepo
    memberships: MembershipRepo
    backend: str  # "memory" | "postgres"


def build_registry(
    session_factory: async_sessionmaker[AsyncSession] | None,
) -> Registry:
    if session_factory is None:
        logger.info("Registry wired to in-memory repositories")
        return Registry(
            org_units=InMemoryOrgUnitRepo(),
            memberships=InMemoryMembershipRepo(),
            backend="memory",
        )

    logger.info("Registry wired to PostgreSQL repositories")
    return Registry(
        org_units=PgOrgUnitRepo(session_factory),
        memberships=PgMembershipRepo(session_factory),
        backend="postgres",
    )
