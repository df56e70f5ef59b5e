import pytest

from tests.factories import make_assignment, make_task, make_user


def _hdr(actor_id) -> dict[str, str]:
    return {"X-Actor-User-Id": str(actor_id)}


@pytest.fixture()
def seeded(db):
    make_user(db, id=1, name="Owner", email="owner@example.com")
    make_user(db, id=2, name="Other", email="other@example.com")
    make_user(db, id=5, name="Alice", email="alice@example.com")
    make_task(db, id=10, owner=1, description="write report")
    db.commit()


def test_health_is_public(client):
    r = client.get("/health")
    assert r.status_code == 200, r.text
    assert r.json() == {"status": "ok"}


def test_missing_actor_header_is_401(client, seeded):
    r = client.get("/tasks/10/assignees")
    assert r.status_code == 401, r.text


def test_malformed_actor_header_is_400(client, seeded):
    r = client.get("/tasks/10/assignees", headers={"X-Actor-User-Id": "abc"})
    assert r.status_code == 400, r.text


def test_assign_list_remove_roundtrip(client, seeded):
    r = client.post("/tasks/10/assignees", json={"id": 5}, headers=_hdr(1))
    assert r.status_code == 201, r.text
    assert r.json() == {"id": 5}

    r = client.get("/tasks/10/assignees", headers=_hdr(1))
    assert r.status_code == 200, r.text
    assert r.json() == [{"id": 5, "name": "Alice", "email": "alice@example.com"}]

    r = client.delete("/tasks/10/assignees/5", headers=_hdr(1))
    assert r.status_code == 204, r.text

    r = client.delete("/tasks/10/assignees/5", headers=_hdr(1))
    assert r.status_code == 204, r.text

    r = client.get("/tasks/10/assignees", headers=_hdr(1))
    assert r.json() == []


def test_assign_duplicate_is_409(client, seeded):
    assert client.post("/tasks/10/assignees", json={"id": 5}, headers=_hdr(1)).status_code == 201

    r = client.post("/tasks/10/assignees", json={"id": 5}, headers=_hdr(1))
    assert r.status_code == 409, r.text


def test_non_owner_gets_403(client, seeded):
    assert client.post("/tasks/10/assignees", json={"id": 5}, headers=_hdr(2)).status_code == 403
    assert client.get("/tasks/10/assignees", headers=_hdr(2)).status_code == 403
    assert client.delete("/tasks/10/assignees/5", headers=_hdr(2)).status_code == 403


def test_unknown_task_gets_404(client, seeded):
    assert client.post("/tasks/404/assignees", json={"id": 5}, headers=_hdr(1)).status_code == 404
    assert client.get("/tasks/404/assignees", headers=_hdr(1)).status_code == 404
    assert client.delete("/tasks/404/assignees/5", headers=_hdr(1)).status_code == 404


def test_assign_rejects_extra_fields(client, seeded):
    r = client.post("/tasks/10/assignees", json={"id": 5, "active": True}, headers=_hdr(1))
    assert r.status_code == 422, r.text


def test_balanced_assignment(client, db, seeded):
    make_task(db, id=11, owner=1)
    make_assignment(db, task_id=11, user_id=1)
    db.commit()

    r = client.post("/tasks/assignments", headers=_hdr(1))

    assert r.status_code == 200, r.text
    # loads: user1=1, user2=0, user5=0 -> lowest id wins
    assert r.json() == {"assigned": {"10": 2}, "failed": []}


def test_select_task(client, db, seeded):
    make_assignment(db, task_id=10, user_id=5)
    db.commit()

    r = client.put("/users/5/selection", json={"id": 10}, headers=_hdr(5))
    assert r.status_code == 204, r.text


def test_select_task_for_someone_else_is_403(client, db, seeded):
    make_assignment(db, task_id=10, user_id=5)
    db.commit()

    r = client.put("/users/5/selection", json={"id": 10}, headers=_hdr(1))
    assert r.status_code == 403, r.text


def test_select_not_assigned_task_is_403(client, seeded):
    r = client.put("/users/5/selection", json={"id": 10}, headers=_hdr(5))
    assert r.status_code == 403, r.text


def test_select_unknown_task_is_404(client, seeded):
    r = client.put("/users/5/selection", json={"id": 404}, headers=_hdr(5))
    assert r.status_code == 404, r.text
