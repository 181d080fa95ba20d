from __future__ import annotations

from fastapi.testclient import TestClient

from schoolorg.db.registry import Registry
from tests.conftest import add_test_unit


def _delete(client: TestClient, user_id: str, org_unit_id: str):
    # httpx's .delete() takes no body
    return client.request(
        "DELETE", "/memberships", json={"userId": user_id, "orgUnitId": org_unit_id}
    )


def test_create_membership(client: TestClient, registry: Registry) -> None:
    unit = add_test_unit(registry, "CS-101")
    resp = client.post(
        "/memberships",
        json={"userId": "u1", "orgUnitId": unit.id, "role": "teacher"},
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["userId"] == "u1"
    assert data["orgUnitId"] == unit.id
    assert data["role"] == "teacher"
    assert "createdAt" in data


def test_create_membership_unknown_org_unit_is_404(client: TestClient) -> None:
    resp = client.post(
        "/memberships", json={"userId": "u1", "orgUnitId": "o1", "role": "teacher"}
    )
    assert resp.status_code == 404


def test_create_membership_duplicate_pair_is_409(
    client: TestClient, registry: Registry
) -> None:
    unit = add_test_unit(registry, "CS-101")
    body = {"userId": "u1", "orgUnitId": unit.id, "role": "teacher"}
    assert client.post("/memberships", json=body).status_code == 201
    body["role"] = "head"
    assert client.post("/memberships", json=body).status_code == 409


def test_create_membership_invalid_role_is_422(
    client: TestClient, registry: Registry
) -> None:
    unit = add_test_unit(registry, "CS-101")
    resp = client.post(
        "/memberships", json={"userId": "u1", "orgUnitId": unit.id, "role": "wizard"}
    )
    assert resp.status_code == 422


def test_create_membership_missing_field_is_422(client: TestClient) -> None:
    resp = client.post("/memberships", json={"userId": "u1", "orgUnitId": "o1"})
    assert resp.status_code == 422


def test_delete_membership_is_idempotent(client: TestClient, registry: Registry) -> None:
    unit = add_test_unit(registry, "CS-101")
    client.post(
        "/memberships", json={"userId": "u1", "orgUnitId": unit.id, "role": "teacher"}
    )

    first = _delete(client, "u1", unit.id)
    second = _delete(client, "u1", unit.id)
    assert first.status_code == 200 and first.json() == {"ok": True}
    assert second.status_code == 200 and second.json() == {"ok": True}

    resp = client.get("/memberships", params={"userId": "u1", "orgUnitId": unit.id})
    assert resp.json() == []


def test_delete_membership_that_never_existed(client: TestClient) -> None:
    resp = _delete(client, "ghost", "nowhere")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_list_memberships_by_org_unit(client: TestClient, registry: Registry) -> None:
    unit = add_test_unit(registry, "CS-101")
    for user_id, role in (("t", "teacher"), ("s", "student")):
        client.post(
            "/memberships", json={"userId": user_id, "orgUnitId": unit.id, "role": role}
        )
    resp = client.get("/memberships", params={"orgUnitId": unit.id})
    assert resp.status_code == 200
    assert {(m["userId"], m["role"]) for m in resp.json()} == {
        ("t", "teacher"),
        ("s", "student"),
    }


def test_list_memberships_without_filter_is_422(client: TestClient) -> None:
    assert client.get("/memberships").status_code == 422
