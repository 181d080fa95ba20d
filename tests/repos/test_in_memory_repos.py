from __future__ import annotations

import asyncio

import pytest

from schoolorg.models.membership import Membership
from schoolorg.models.org_unit import OrgUnit
from schoolorg.repos.membership_repo import InMemoryMembershipRepo
from schoolorg.repos.org_unit_repo import InMemoryOrgUnitRepo
from schoolorg.services.errors import MembershipAlreadyExistsError


def test_org_unit_add_rejects_duplicate_id() -> None:
    repo = InMemoryOrgUnitRepo()
    node = OrgUnit.new(name="A")
    asyncio.run(repo.add(node))
    with pytest.raises(ValueError, match="already exists"):
        asyncio.run(repo.add(node))


def test_list_subtrees_over_several_roots() -> None:
    repo = InMemoryOrgUnitRepo()
    a = OrgUnit.new(name="A")
    a1 = OrgUnit.new(name="A1", parent=a)
    b = OrgUnit.new(name="B")
    b1 = OrgUnit.new(name="B1", parent=b)
    c = OrgUnit.new(name="C")
    for n in (a, a1, b, b1, c):
        asyncio.run(repo.add(n))

    found = asyncio.run(repo.list_subtrees([a.id, b1.id]))
    assert {n.id for n in found} == {a.id, a1.id, b1.id}


def test_list_subtrees_empty_input() -> None:
    repo = InMemoryOrgUnitRepo()
    asyncio.run(repo.add(OrgUnit.new(name="A")))
    assert asyncio.run(repo.list_subtrees([])) == []


def test_membership_add_rejects_duplicate_pair() -> None:
    repo = InMemoryMembershipRepo()
    asyncio.run(repo.add(Membership(user_id="u", org_unit_id="o", role="teacher")))
    with pytest.raises(MembershipAlreadyExistsError):
        asyncio.run(repo.add(Membership(user_id="u", org_unit_id="o", role="head")))


def test_membership_remove_reports_whether_removed() -> None:
    repo = InMemoryMembershipRepo()
    asyncio.run(repo.add(Membership(user_id="u", org_unit_id="o", role="teacher")))
    assert asyncio.run(repo.remove("u", "o")) is True
    assert asyncio.run(repo.remove("u", "o")) is False


def test_org_unit_is_frozen() -> None:
    node = OrgUnit.new(name="A")
    with pytest.raises(AttributeError):
        node.ancestors = ("x",)  # type: ignore[misc]
