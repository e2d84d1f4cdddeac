"""Tests for group and user routes."""

from chat_app.utils import config


def create_group(client, auth, group_id="g2", member_ids=None, **extra):
    payload = {"id": group_id, "name": "Design", "member_ids": member_ids or [], **extra}
    return client.post("/api/v1/groups", json=payload, auth=auth)


def test_create_group_adds_creator(client, bob):
    r = create_group(client, bob, member_ids=["user3"], description="Design reviews")
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["id"] == "g2"
    assert data["created_by"] == "user2"
    assert data["members"] == ["user2", "user3"]


def test_create_duplicate_group(client, alice):
    r = create_group(client, alice, group_id="group1")
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "CONFLICT_GROUP_ALREADY_EXISTS"


def test_create_group_over_member_limit(client, alice, monkeypatch):
    monkeypatch.setattr(config, "MAX_GROUP_MEMBERS", 2)
    r = create_group(client, alice, member_ids=["user2", "user3"])
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "BAD_REQUEST_GROUP_MEMBER_LIMIT"


def test_create_group_with_unknown_member(client, alice):
    r = create_group(client, alice, member_ids=["nobody"])
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND_USER_NOT_FOUND"

    r = client.get("/api/v1/groups/g2", auth=alice)
    assert r.status_code == 404


def test_get_group_for_members_only(client, alice, charlie):
    create_group(client, alice, member_ids=["user2"])

    r = client.get("/api/v1/groups/g2", auth=alice)
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Design"

    r = client.get("/api/v1/groups/g2", auth=charlie)
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "FORBIDDEN_NOT_GROUP_MEMBER"


def test_get_unknown_group(client, alice):
    r = client.get("/api/v1/groups/missing", auth=alice)
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND_GROUP_NOT_FOUND"


def test_add_and_list_members(client, alice):
    create_group(client, alice)

    r = client.post("/api/v1/groups/g2/members", json={"user_ids": ["user2", "user3", "user1"]}, auth=alice)
    assert r.status_code == 200
    assert r.json()["data"] == {"success": True, "added_count": 2}

    r = client.get("/api/v1/groups/g2/members", auth=alice)
    assert r.json()["data"] == ["user1", "user2", "user3"]


def test_add_members_requires_membership(client, alice, charlie):
    create_group(client, alice)
    r = client.post("/api/v1/groups/g2/members", json={"user_ids": ["user3"]}, auth=charlie)
    assert r.status_code == 403


def test_add_members_requires_user_ids(client, alice):
    r = client.post("/api/v1/groups/group1/members", json={"user_ids": []}, auth=alice)
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "BAD_REQUEST_VALIDATION_ERROR"


def test_new_member_sees_later_group_messages(client, alice, charlie):
    create_group(client, alice)
    client.post("/api/v1/groups/g2/members", json={"user_ids": ["user3"]}, auth=alice)
    client.post("/api/v1/sendMessage", json={"destination_id": "g2", "message": "welcome"}, auth=alice)

    r = client.get("/api/v1/users/user3/conversations", auth=charlie)
    assert [c["destination_id"] for c in r.json()["data"]["conversations"]] == ["g2"]


def test_create_and_get_user(client, alice):
    payload = {"id": "user4", "name": "Dana", "email": "dana@example.com"}
    r = client.post("/api/v1/users", json=payload, auth=alice)
    assert r.status_code == 201
    assert r.json()["data"]["email"] == "dana@example.com"

    r = client.get("/api/v1/users/user4", auth=alice)
    assert r.json()["data"]["name"] == "Dana"


def test_create_duplicate_user(client, alice):
    payload = {"id": "user1", "name": "Alice", "email": "alice@example.com"}
    r = client.post("/api/v1/users", json=payload, auth=alice)
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "CONFLICT_USER_ALREADY_EXISTS"


def test_create_user_with_invalid_email(client, alice):
    payload = {"id": "user5", "name": "Eve", "email": "not-an-email"}
    r = client.post("/api/v1/users", json=payload, auth=alice)
    assert r.status_code == 400
    assert r.json()["error"]["details"][0]["field"] == "email"


def test_get_unknown_user(client, alice):
    r = client.get("/api/v1/users/nobody", auth=alice)
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND_USER_NOT_FOUND"
