"""Request/response bodies.

JSON keys are camelCase (``parentId``, ``orgUnitId``); Python attributes
stay snake_case.  Either spelling is accepted on input, and string
fields are stripped before any route sees them.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from schoolorg.models.membership import Membership
from schoolorg.models.org_unit import OrgUnit


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )


# --- Org units ---


class OrgUnitCreateIn(CamelModel):
    name: str
    parent_id: str | None = None


class DescendantsIn(CamelModel):
    org_unit_id: str


class OrgUnitOut(CamelModel):
    id: str
    name: str
    parent_id: str | None
    ancestors: list[str]
    created_at: datetime

    @classmethod
    def from_domain(cls, node: OrgUnit) -> OrgUnitOut:
        return cls(
            id=node.id,
            name=node.name,
            parent_id=node.parent_id,
            ancestors=list(node.ancestors),
            created_at=node.created_at,
        )


class CoveredOrgUnitsOut(CamelModel):
    org_unit_ids: list[str]


# --- Memberships ---


class MembershipCreateIn(CamelModel):
    user_id: str
    org_unit_id: str
    role: str


class MembershipDeleteIn(CamelModel):
    user_id: str
    org_unit_id: str


class MembershipOut(CamelModel):
    user_id: str
    org_unit_id: str
    role: str
    created_at: datetime

    @classmethod
    def from_domain(cls, membership: Membership) -> MembershipOut:
        return cls(
            user_id=membership.user_id,
            org_unit_id=membership.org_unit_id,
            role=membership.role,
            created_at=membership.created_at,
        )


class AckOut(BaseModel):
    ok: bool = True
