from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

ROLES: tuple[str, ...] = (
    "student",
    "teacher",
    "head",
    "college_qc",
    "vice_dean",
    "dean",
    "admin",
)


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class Membership:
    user_id: str
    org_unit_id: str
    role: str  # one of ROLES
    created_at: datetime = field(default_factory=_now)
