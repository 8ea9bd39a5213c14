"""/users endpoints over the seeded in-memory store."""

from __future__ import annotations

import pytest

from tests.factories.payloads import user_payload


@pytest.mark.asyncio
async def test_list_users_newest_first_without_password(app_client) -> None:
    resp = await app_client.get("/users")

    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 2
    assert [u["id"] for u in body["items"]] == ["user2", "user1"]
    assert all("password" not in u for u in body["items"])


@pytest.mark.asyncio
async def test_get_user_resolves_gym_refs(app_client) -> None:
    resp = await app_client.get("/users/user1")

    assert resp.status_code == 200
    body = resp.json()
    assert "password" not in body
    assert body["reviews"][0]["gym"] == {
        "id": "gym1",
        "name": "Basic-Fit Brussel Centrum",
        "brand": "Basic-Fit",
    }
    assert body["favorite_gyms"] == []


@pytest.mark.asyncio
async def test_get_user_errors(app_client) -> None:
    assert (await app_client.get("/users/user99")).status_code == 404
    assert (await app_client.get("/users/gym1")).status_code == 400


@pytest.mark.asyncio
async def test_create_user(app_client) -> None:
    resp = await app_client.post("/users", json=user_payload(email="New.User@Example.com", gender="man"))

    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] == "user3"
    assert body["email"] == "new.user@example.com"
    assert body["gender"] == "male"
    assert "password" not in body


@pytest.mark.asyncio
async def test_create_user_conflict_and_validation(app_client) -> None:
    resp = await app_client.post("/users", json=user_payload(email="JAN.PEETERS@gmail.com"))
    assert resp.status_code == 409

    resp = await app_client.post("/users", json=user_payload(age=10, password="123"))
    assert resp.status_code == 400
    messages = resp.json()["messages"]
    assert any(m.startswith("age") for m in messages)
    assert any(m.startswith("password") for m in messages)


@pytest.mark.asyncio
async def test_update_user_ignores_password(app_client, seeded_store) -> None:
    resp = await app_client.put("/users/user1", json={"age": 40, "password": "changed!"})

    assert resp.status_code == 200
    assert resp.json()["age"] == 40
    assert (await seeded_store.users.get("user1")).password == "password123"


@pytest.mark.asyncio
async def test_update_user_email_conflict(app_client) -> None:
    resp = await app_client.put("/users/user1", json={"email": "marie.dubois@gmail.com"})
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_favorites(app_client) -> None:
    resp = await app_client.post("/users/user1/favorites", json={"gym_id": "gym2"})
    assert resp.status_code == 200
    assert resp.json()["favorite_gyms"] == ["gym2"]

    assert (await app_client.post("/users/user1/favorites", json={"gym_id": "gym2"})).status_code == 409
    assert (await app_client.post("/users/user1/favorites", json={"gym_id": "gym99"})).status_code == 404
    assert (await app_client.post("/users/user1/favorites", json={})).status_code == 400

    detail = (await app_client.get("/users/user1")).json()
    assert detail["favorite_gyms"] == [{"id": "gym2", "name": "Jims Antwerpen", "brand": "Jims"}]


@pytest.mark.asyncio
async def test_delete_user_keeps_review_on_gym(app_client) -> None:
    assert (await app_client.delete("/users/user2")).status_code == 204
    assert (await app_client.get("/users/user2")).status_code == 404

    gym = (await app_client.get("/gyms/gym2")).json()
    assert gym["reviews"][0]["user_id"] == "user2"
    assert gym["reviews"][0]["user"] is None
    assert gym["average_rating"] == 5.0


@pytest.mark.asyncio
async def test_deleted_gym_drops_out_of_user_detail(app_client) -> None:
    await app_client.post("/users/user1/favorites", json={"gym_id": "gym3"})
    assert (await app_client.delete("/gyms/gym3")).status_code == 204

    detail = (await app_client.get("/users/user1")).json()
    assert detail["favorite_gyms"] == []
