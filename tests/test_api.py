import uuid

import pytest

from app.core.security import create_access_token

PASSWORD = "password1"


async def register(client, email, name="Someone"):
    response = await client.post(
        "/auth/register", json={"email": email, "password": PASSWORD, "name": name}
    )
    assert response.status_code == 201
    body = response.json()
    return body["user"]["id"], {"Authorization": f"Bearer {body['access_token']}"}


async def create_snippet(client, headers, title="Snippet", is_public=False):
    response = await client.post(
        "/snippets/",
        json={"title": title, "code": "echo hi", "language": "bash", "is_public": is_public},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["id"]


@pytest.mark.asyncio
async def test_health(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert "version" in body


@pytest.mark.asyncio
async def test_register_login_and_me(test_client):
    user_id, headers = await register(test_client, "alice@example.com", "Alice")

    login = await test_client.post(
        "/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
    )
    assert login.status_code == 200
    assert login.json()["user"]["id"] == user_id

    me = await test_client.get("/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["name"] == "Alice"
    assert "password_hash" not in me.json()


@pytest.mark.asyncio
async def test_register_duplicate_is_409(test_client):
    await register(test_client, "dup@example.com")

    response = await test_client.post(
        "/auth/register", json={"email": "dup@example.com", "password": PASSWORD, "name": "Again"}
    )

    assert response.status_code == 409
    assert response.json() == {"error": "conflict", "message": "Email already exists"}


@pytest.mark.asyncio
async def test_register_validation(test_client):
    response = await test_client.post(
        "/auth/register", json={"email": "not-an-email", "password": "x", "name": ""}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_bad_login_is_401_with_header(test_client):
    await register(test_client, "bob@example.com")

    response = await test_client.post(
        "/auth/login", json={"email": "bob@example.com", "password": "wrong-one"}
    )

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
@pytest.mark.parametrize("headers,message", [
    ({}, "Not authenticated"),
    ({"Authorization": "Bearer garbage"}, "Invalid token"),
])
async def test_me_requires_valid_token(test_client, headers, message):
    response = await test_client.get("/auth/me", headers=headers)

    assert response.status_code == 401
    assert response.json()["message"] == message


@pytest.mark.asyncio
async def test_token_for_unknown_user(test_client):
    token = create_access_token({"sub": str(uuid.uuid4()), "email": "ghost@example.com"})

    response = await test_client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "User not found"


@pytest.mark.asyncio
async def test_users_list_hides_hashes(test_client):
    _, headers = await register(test_client, "carol@example.com")
    await register(test_client, "dave@example.com")

    unauthorized = await test_client.get("/users/")
    assert unauthorized.status_code == 401

    response = await test_client.get("/users/", headers=headers)
    assert response.status_code == 200
    users = response.json()
    assert {u["email"] for u in users} == {"carol@example.com", "dave@example.com"}
    assert all("password_hash" not in u for u in users)


@pytest.mark.asyncio
async def test_snippet_visibility_over_http(test_client):
    _, owner = await register(test_client, "owner@example.com")
    public_id = await create_snippet(test_client, owner, "public", is_public=True)
    private_id = await create_snippet(test_client, owner, "private")

    anonymous = await test_client.get("/snippets/")
    assert [s["id"] for s in anonymous.json()] == [public_id]

    # Невалидный токен на маршрутах с необязательной авторизацией равен анонимному доступу
    with_garbage = await test_client.get("/snippets/", headers={"Authorization": "Bearer garbage"})
    assert [s["id"] for s in with_garbage.json()] == [public_id]

    own = await test_client.get("/snippets/", headers=owner)
    assert {s["id"] for s in own.json()} == {public_id, private_id}

    public = await test_client.get("/snippets/public", headers=owner)
    assert [s["id"] for s in public.json()] == [public_id]

    assert (await test_client.get(f"/snippets/{public_id}")).status_code == 200
    hidden = await test_client.get(f"/snippets/{private_id}")
    assert hidden.status_code == 403
    assert hidden.json() == {"error": "forbidden", "message": "You do not have access to this snippet"}


@pytest.mark.asyncio
async def test_snippet_not_found(test_client):
    response = await test_client.get(f"/snippets/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"error": "not_found", "message": "Snippet not found"}


@pytest.mark.asyncio
async def test_create_requires_auth(test_client):
    response = await test_client.post(
        "/snippets/", json={"title": "t", "code": "", "language": "c"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_share_flow(test_client):
    _, owner = await register(test_client, "o@example.com")
    reader_id, reader = await register(test_client, "a@example.com")
    _, stranger = await register(test_client, "b@example.com")
    snippet_id = await create_snippet(test_client, owner)

    shared = await test_client.post(
        f"/snippets/{snippet_id}/share", json={"user_ids": [reader_id]}, headers=owner
    )
    assert shared.status_code == 200
    assert shared.json() == {"snippet_id": snippet_id, "user_ids": [reader_id]}

    assert (await test_client.get(f"/snippets/{snippet_id}", headers=reader)).status_code == 200
    assert (await test_client.get(f"/snippets/{snippet_id}", headers=stranger)).status_code == 403

    inbox = await test_client.get("/snippets/shared", headers=reader)
    assert [s["id"] for s in inbox.json()] == [snippet_id]

    reshare = await test_client.post(
        f"/snippets/{snippet_id}/share", json={"user_ids": [reader_id]}, headers=reader
    )
    assert reshare.status_code == 403

    missing = await test_client.post(
        f"/snippets/{snippet_id}/share", json={"user_ids": [str(uuid.uuid4())]}, headers=owner
    )
    assert missing.status_code == 404
    assert (await test_client.get(f"/snippets/{snippet_id}", headers=reader)).status_code == 200


@pytest.mark.asyncio
async def test_update_and_delete(test_client):
    _, owner = await register(test_client, "writer@example.com")
    _, other = await register(test_client, "other@example.com")
    snippet_id = await create_snippet(test_client, owner, is_public=True)

    patched = await test_client.patch(
        f"/snippets/{snippet_id}", json={"title": "Renamed"}, headers=owner
    )
    assert patched.status_code == 200
    assert patched.json()["title"] == "Renamed"
    assert patched.json()["language"] == "bash"
    assert patched.json()["owner"]["email"] == "writer@example.com"

    forbidden = await test_client.patch(
        f"/snippets/{snippet_id}", json={"title": "Nope"}, headers=other
    )
    assert forbidden.status_code == 403
    assert forbidden.json()["message"] == "You can only update your own snippet"

    assert (await test_client.delete(f"/snippets/{snippet_id}", headers=other)).status_code == 403

    deleted = await test_client.delete(f"/snippets/{snippet_id}", headers=owner)
    assert deleted.status_code == 200
    assert deleted.json() == {"deleted": True}
    assert (await test_client.get(f"/snippets/{snippet_id}")).status_code == 404
