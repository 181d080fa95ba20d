from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure repo root is on sys.path so `import schoolorg` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from schoolorg.db.registry import Registry, build_registry  # noqa: E402
from schoolorg.main import app  # noqa: E402
from schoolorg.models.membership import Membership  # noqa: E402
from schoolorg.models.org_unit import OrgUnit  # noqa: E402
from schoolorg.services import token_service  # noqa: E402
from schoolorg.services.access import AllowAllAuthorizer, CoverageAuthorizer  # noqa: E402


@pytest.fixture(autouse=True)
def registry() -> Registry:
    """Fresh in-memory registry and open access for every test."""
    reg = build_registry(None)
    app.state.registry = reg
    app.state.authorizer = AllowAllAuthorizer()
    app.state.auth_required = False
    app.state.strict_parent = True
    return reg


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def secured(registry: Registry) -> Registry:
    """Switch the app to bearer-token auth with coverage-based access."""
    app.state.auth_required = True
    app.state.authorizer = CoverageAuthorizer(registry)
    return registry


def mint_token(username: str = "test-user", roles: list[str] | None = None) -> str:
    """Create a valid ES256 JWT for testing."""
    return token_service.create_access_token(sub=username, roles=roles)


def auth(token: str | None) -> dict[str, str]:
    if token is None:
        return {}
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Tree / membership helpers (write straight to the registry's repos)
# ---------------------------------------------------------------------------


def add_test_unit(
    registry: Registry, name: str, parent: OrgUnit | None = None
) -> OrgUnit:
    node = OrgUnit.new(name=name, parent=parent)
    asyncio.run(registry.org_units.add(node))
    return node


def build_school_tree(registry: Registry) -> dict[str, OrgUnit]:
    """University -> College -> Dept -> Class, plus a sibling dept and a second root."""
    uni = add_test_unit(registry, "University")
    college = add_test_unit(registry, "Engineering College", uni)
    dept = add_test_unit(registry, "Computer Science Dept", college)
    klass = add_test_unit(registry, "CS-101 Class", dept)
    ee = add_test_unit(registry, "Electrical Dept", college)
    other = add_test_unit(registry, "Other School")
    return {
        "uni": uni,
        "college": college,
        "dept": dept,
        "class": klass,
        "ee": ee,
        "other": other,
    }


def add_test_member(
    registry: Registry, user_id: str, org_unit_id: str, role: str = "teacher"
) -> Membership:
    m = Membership(user_id=user_id, org_unit_id=org_unit_id, role=role)
    asyncio.run(registry.memberships.add(m))
    return m
