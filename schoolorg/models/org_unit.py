from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class OrgUnit:
    """A node in the school's organizational tree.

    ``ancestors`` is the materialized path: ids from the root down to the
    immediate parent.  It is computed once in ``new`` and never rewritten,
    so for any node with parent P: ``ancestors == P.ancestors + (P.id,)``.
    """

    id: str
    name: str
    parent_id: str | None = None
    ancestors: tuple[str, ...] = ()
    created_at: datetime = field(default_factory=_now)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def depth(self) -> int:
        return len(self.ancestors)

    @staticmethod
    def new(*, name: str, parent: OrgUnit | None = None) -> OrgUnit:
        if parent is None:
            return OrgUnit(id=str(uuid4()), name=name)
        return OrgUnit(
            id=str(uuid4()),
            name=name,
            parent_id=parent.id,
            ancestors=(*parent.ancestors, parent.id),
        )
