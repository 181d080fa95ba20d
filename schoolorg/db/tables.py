"""SQLAlchemy table definitions.

These map to the frozen dataclass domain models in schoolorg/models/.
Repos convert between SQLAlchemy rows and domain dataclasses.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from schoolorg.db.engine import Base

ID_LENGTH = 64


class OrgUnitRow(Base):
    __tablename__ = "org_units"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_id: Mapped[str | None] = mapped_column(
        String(ID_LENGTH), ForeignKey("org_units.id"), nullable=True, index=True
    )
    # Materialized path, root first.  GIN index backs the && / @> subtree filter.
    ancestors: Mapped[list[str]] = mapped_column(
        ARRAY(String(ID_LENGTH)), nullable=False, default=list
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("ix_org_units_ancestors", "ancestors", postgresql_using="gin"),
    )


class MembershipRow(Base):
    __tablename__ = "memberships"

    # Composite PK: at most one membership per (user, org unit)
    user_id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)
    org_unit_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("org_units.id"),
        primary_key=True,
        index=True,
    )
    role: Mapped[str] = mapped_column(
        String(32), nullable=False
    )  # student|teacher|head|college_qc|vice_dean|dean|admin
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
