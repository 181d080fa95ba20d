from __future__ import annotations

import asyncio

from schoolorg.db.registry import Registry
from schoolorg.services import hierarchy_service
from scripts.seed_org_tree import seed


def test_seed_builds_four_level_chain(registry: Registry) -> None:
    ids = asyncio.run(seed(registry))

    klass = asyncio.run(registry.org_units.get_by_id(ids["CS-101 Class"]))
    assert klass is not None
    assert klass.ancestors == (
        ids["University"],
        ids["Engineering College"],
        ids["Computer Science Dept"],
    )


def test_seed_admin_covers_whole_tree(registry: Registry) -> None:
    ids = asyncio.run(seed(registry))
    covered = asyncio.run(hierarchy_service.covered_org_unit_ids(registry, "admin@x.com"))
    assert covered == set(ids.values())

    class_members = asyncio.run(registry.memberships.list_by_org_unit(ids["CS-101 Class"]))
    assert {m.role for m in class_members} == {"teacher", "student"}
