"""
tests/test_api_notices.py -- Integration tests for the notice CRUD routes.

Coverage:
  - End-to-end: register, login, create, list (owner expanded), update,
    foreign update/delete -> 404, delete -> empty list
  - Category filter on GET /notices
  - 404 for ids that never existed, 422 for non-integer ids and bad bodies
  - Request body cannot set the owner
"""

from __future__ import annotations

from fastapi.testclient import TestClient


def _register_and_login(client: TestClient, name: str, email: str, password: str = "pass-1234") -> dict[str, str]:
    resp = client.post(
        "/register",
        json={"name": name, "email": email, "password": password, "phone_number": "555", "department": "Ops"},
    )
    assert resp.status_code == 201, resp.text
    resp = client.post("/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": resp.headers["authorization"]}


def _create(client: TestClient, headers: dict[str, str], title: str = "T", body: str = "B", category: str = "C"):
    resp = client.post("/notices", json={"title": title, "body": body, "category": category}, headers=headers)
    assert resp.status_code == 201, resp.text
    assert resp.json() == {"msg": "Notice Created Successfully"}


def test_end_to_end_ownership(client: TestClient) -> None:
    alice = _register_and_login(client, "Alice", "alice@example.com")
    bob = _register_and_login(client, "Bob", "bob@example.com")

    _create(client, alice, title="T", body="B", category="C")

    resp = client.get("/notices", headers=alice)
    assert resp.status_code == 200
    notices = resp.json()
    assert len(notices) == 1
    notice = notices[0]
    assert (notice["title"], notice["body"], notice["category"]) == ("T", "B", "C")
    assert notice["owner"]["name"] == "Alice"
    assert notice["owner"]["email"] == "alice@example.com"
    assert set(notice["owner"]) == {"id", "name", "email"}
    assert notice["created_at"]
    notice_id = notice["id"]

    resp = client.put(f"/notices/{notice_id}", json={"title": "T2", "body": "B", "category": "C"}, headers=alice)
    assert resp.status_code == 200
    assert resp.json() == {"msg": "Notice Updated"}
    listed = client.get("/notices", headers=alice).json()
    assert [n["title"] for n in listed] == ["T2"]
    assert listed[0]["created_at"] == notice["created_at"]

    resp = client.put(f"/notices/{notice_id}", json={"title": "pwned", "body": "B", "category": "C"}, headers=bob)
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "not_found"
    resp = client.delete(f"/notices/{notice_id}", headers=bob)
    assert resp.status_code == 404
    assert [n["title"] for n in client.get("/notices", headers=alice).json()] == ["T2"]

    resp = client.delete(f"/notices/{notice_id}", headers=alice)
    assert resp.status_code == 200
    assert resp.json() == {"msg": "Notice Deleted"}
    assert client.get("/notices", headers=alice).json() == []


def test_any_user_can_list_everyones_notices(client: TestClient) -> None:
    alice = _register_and_login(client, "Alice", "alice@example.com")
    bob = _register_and_login(client, "Bob", "bob@example.com")
    _create(client, alice, title="from alice")
    listed = client.get("/notices", headers=bob).json()
    assert [(n["title"], n["owner"]["name"]) for n in listed] == [("from alice", "Alice")]


def test_category_filter(client: TestClient) -> None:
    alice = _register_and_login(client, "Alice", "alice@example.com")
    for title, category in [("a", "events"), ("b", "news"), ("c", "events"), ("d", "sports")]:
        _create(client, alice, title=title, category=category)

    resp = client.get("/notices", params={"category": "events"}, headers=alice)
    assert resp.status_code == 200
    assert [n["title"] for n in resp.json()] == ["a", "c"]
    assert all(n["category"] == "events" for n in resp.json())
    assert client.get("/notices", params={"category": "nothing"}, headers=alice).json() == []
    assert len(client.get("/notices", headers=alice).json()) == 4


def test_missing_notice_is_404(client: TestClient) -> None:
    alice = _register_and_login(client, "Alice", "alice@example.com")
    body = {"title": "x", "body": "x", "category": "x"}
    assert client.put("/notices/999", json=body, headers=alice).status_code == 404
    assert client.delete("/notices/999", headers=alice).status_code == 404


def test_non_integer_id_is_422(client: TestClient) -> None:
    alice = _register_and_login(client, "Alice", "alice@example.com")
    assert client.delete("/notices/abc", headers=alice).status_code == 422


def test_incomplete_body_is_422(client: TestClient) -> None:
    alice = _register_and_login(client, "Alice", "alice@example.com")
    resp = client.post("/notices", json={"title": "only a title"}, headers=alice)
    assert resp.status_code == 422


def test_body_cannot_choose_owner(client: TestClient) -> None:
    alice = _register_and_login(client, "Alice", "alice@example.com")
    bob = _register_and_login(client, "Bob", "bob@example.com")
    bob_id = client.app.state.user_store.get_by_email("bob@example.com").id
    resp = client.post(
        "/notices",
        json={"title": "T", "body": "B", "category": "C", "owner_id": bob_id, "owner": bob_id},
        headers=alice,
    )
    assert resp.status_code == 201
    [notice] = client.get("/notices", headers=bob).json()
    assert notice["owner"]["name"] == "Alice"


def test_update_and_delete_require_auth(client: TestClient) -> None:
    body = {"title": "x", "body": "x", "category": "x"}
    assert client.put("/notices/1", json=body).status_code == 401
    assert client.delete("/notices/1").status_code == 401
