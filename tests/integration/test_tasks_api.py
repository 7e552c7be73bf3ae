"""Task CRUD, search and pagination over HTTP."""

import pytest


pytestmark = pytest.mark.integration


def _create(client, headers, title="Buy milk", description="2% milk", **extra):
    response = client.post("/tasks", json={"title": title, "description": description, **extra}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_create_defaults_to_pending(client, ann_headers):
    task = _create(client, ann_headers)

    assert task["status"] == "pending"
    assert set(task) == {"id", "title", "description", "status", "owner", "createdAt", "updatedAt"}


def test_owner_in_body_is_ignored(client, ann_headers, bob_headers):
    me = client.get("/auth/me", headers=ann_headers).json()["data"]
    bob = client.get("/auth/me", headers=bob_headers).json()["data"]

    task = _create(client, ann_headers, owner=bob["id"], owner_id=bob["id"])

    assert task["owner"] == me["id"]


def test_create_validation(client, ann_headers):
    response = client.post("/tasks", json={"title": "", "status": "done"}, headers=ann_headers)

    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["title", "description", "status"]


def test_get_update_delete(client, ann_headers):
    task = _create(client, ann_headers)

    fetched = client.get(f"/tasks/{task['id']}", headers=ann_headers)
    assert fetched.json()["data"] == task

    updated = client.put(
        f"/tasks/{task['id']}",
        json={"title": "Buy oat milk", "description": "1 litre", "status": "completed"},
        headers=ann_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["status"] == "completed"
    assert updated.json()["data"]["createdAt"] == task["createdAt"]

    deleted = client.delete(f"/tasks/{task['id']}", headers=ann_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True, "data": {}}

    again = client.delete(f"/tasks/{task['id']}", headers=ann_headers)
    assert again.status_code == 404
    assert again.json() == {"success": False, "message": "Task not found"}
    assert client.get(f"/tasks/{task['id']}", headers=ann_headers).status_code == 404


def test_update_requires_title_and_description(client, ann_headers):
    task = _create(client, ann_headers)

    response = client.put(f"/tasks/{task['id']}", json={"status": "completed"}, headers=ann_headers)

    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["title", "description"]


def test_other_users_task_is_off_limits(client, ann_headers, bob_headers):
    task = _create(client, ann_headers)
    replacement = {"title": "Mine", "description": "Now"}

    for response in (
        client.get(f"/tasks/{task['id']}", headers=bob_headers),
        client.put(f"/tasks/{task['id']}", json=replacement, headers=bob_headers),
        client.delete(f"/tasks/{task['id']}", headers=bob_headers),
    ):
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Not authorized"}

    assert client.get(f"/tasks/{task['id']}", headers=ann_headers).json()["data"] == task


def test_unknown_id_is_not_found(client, ann_headers):
    assert client.get("/tasks/does-not-exist", headers=ann_headers).status_code == 404
    assert client.delete("/tasks/does-not-exist", headers=ann_headers).status_code == 404


def test_list_is_scoped_to_owner(client, ann_headers, bob_headers):
    _create(client, ann_headers)
    _create(client, bob_headers, title="Bob milk")

    body = client.get("/tasks", headers=bob_headers).json()

    assert [t["title"] for t in body["data"]] == ["Bob milk"]
    assert body["pagination"]["total"] == 1


def test_search_and_status(client, ann_headers):
    _create(client, ann_headers, title="Buy milk", description="2%")
    _create(client, ann_headers, title="Laundry", description="Whites", status="in-progress")
    _create(client, ann_headers, title="Bake", description="Needs MILK", status="completed")

    searched = client.get("/tasks", params={"search": "Milk"}, headers=ann_headers).json()
    assert {t["title"] for t in searched["data"]} == {"Buy milk", "Bake"}

    filtered = client.get("/tasks", params={"status": "in-progress"}, headers=ann_headers).json()
    assert [t["title"] for t in filtered["data"]] == ["Laundry"]

    nothing = client.get("/tasks", params={"status": "archived"}, headers=ann_headers).json()
    assert nothing["data"] == []
    assert nothing["pagination"] == {"page": 1, "limit": 10, "total": 0, "pages": 0}


def test_pagination(client, ann_headers):
    for title in ("one", "two", "three"):
        _create(client, ann_headers, title=title)

    response = client.get("/tasks", params={"page": 2, "limit": 1}, headers=ann_headers)

    body = response.json()
    assert response.status_code == 200
    assert [t["title"] for t in body["data"]] == ["two"]
    assert body["pagination"] == {"page": 2, "limit": 1, "total": 3, "pages": 3}


@pytest.mark.parametrize("params", [{"page": "0"}, {"limit": "abc"}, {"page": "1.5"}])
def test_invalid_pagination(client, ann_headers, params):
    response = client.get("/tasks", params=params, headers=ann_headers)

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_page_far_past_the_end(client, ann_headers):
    _create(client, ann_headers)

    response = client.get("/tasks", params={"page": "10000000000000000000"}, headers=ann_headers)

    assert response.status_code == 200
    assert response.json()["data"] == []
    assert response.json()["pagination"] == {"page": 10**19, "limit": 10, "total": 1, "pages": 1}


def test_limit_above_one_hundred(client, ann_headers):
    for title in ("one", "two", "three"):
        _create(client, ann_headers, title=title)

    response = client.get("/tasks", params={"limit": "500"}, headers=ann_headers)

    assert response.status_code == 200
    assert len(response.json()["data"]) == 3
    assert response.json()["pagination"] == {"page": 1, "limit": 500, "total": 3, "pages": 1}
