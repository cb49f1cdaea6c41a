"""
tests.test_users_api

Registration and admin user management over HTTP.
"""

from __future__ import annotations

import base64

import httpx
import pytest
from conftest import ADMIN, CUSTOMER, auth_as, basic, user_id

from webshop.db.repositories.users import UserRepo

JSON = {"Accept": "application/json"}


@pytest.mark.asyncio
async def test_register_twice_with_same_email(client: httpx.AsyncClient) -> None:
    new_user = {"name": "New", "email": "new@email.com", "password": "long-enough-pw"}

    r = await client.post("/api/register", json=new_user, headers=JSON)
    assert r.status_code == 201
    body = r.json()
    assert body["email"] == "new@email.com"
    assert body["role"] == "customer"
    assert len(body["_id"]) == 24
    assert "password" not in body and "password_hash" not in body

    r = await client.post("/api/register", json=new_user, headers=JSON)
    assert r.status_code == 400
    assert "already in use" in r.json()["error"]

    # The new account can authenticate.
    r = await client.get("/api/products", headers=basic("new@email.com", "long-enough-pw"))
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_register_race_on_same_email_hides_storage_details(
    client: httpx.AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    # Simulate a concurrent registration: the lookup misses, the unique index does not.
    async def lookup_miss(self: UserRepo, email: str) -> None:
        return None

    monkeypatch.setattr(UserRepo, "find_by_email", lookup_miss)
    r = await client.post(
        "/api/register",
        json={"name": "Twin", "email": CUSTOMER["email"], "password": "twin-password"},
        headers=JSON,
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Email is already in use"}
    assert "$2b$" not in r.text
    assert "INSERT" not in r.text

    monkeypatch.undo()
    # The existing account is untouched and the failed insert was rolled back.
    r = await client.get("/api/products", headers=auth_as(CUSTOMER))
    assert r.status_code == 200
    r = await client.get("/api/users", headers=auth_as(ADMIN))
    assert [u["email"] for u in r.json()].count(CUSTOMER["email"]) == 1


@pytest.mark.asyncio
async def test_register_cannot_grant_admin(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/api/register",
        json={"name": "Sneaky", "email": "sneaky@email.com", "password": "1234567890", "role": "admin"},
        headers=JSON,
    )
    assert r.status_code == 201
    assert r.json()["role"] == "customer"


@pytest.mark.asyncio
async def test_register_validation_errors(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/api/register",
        json={"name": "Shorty", "email": "shorty@email.com", "password": "short"},
        headers=JSON,
    )
    assert r.status_code == 400
    assert r.json()["error"] == ["Password is too short"]

    r = await client.post("/api/register", json={"role": "superuser"}, headers=JSON)
    assert r.status_code == 400
    assert r.json()["error"] == ["Missing name", "Missing email", "Missing password", "Unknown role"]

    r = await client.post(
        "/api/register",
        json={"name": "x" * 51, "email": "not-an-email", "password": "1234567890"},
        headers=JSON,
    )
    assert r.json()["error"] == ["Name is too long", "Invalid email"]


@pytest.mark.asyncio
async def test_register_requires_json_content_type(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/api/register",
        content=b'{"name": "A"}',
        headers={"Accept": "application/json", "Content-Type": "text/plain"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid Content-Type. Expected application/json"}


@pytest.mark.asyncio
async def test_register_with_malformed_json(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/api/register",
        content=b"{oops",
        headers={"Accept": "application/json", "Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON body"}


@pytest.mark.asyncio
async def test_list_users_by_role(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/users", headers=auth_as(CUSTOMER))
    assert r.status_code == 403

    r = await client.get("/api/users", headers=auth_as(ADMIN))
    assert r.status_code == 200
    emails = {u["email"] for u in r.json()}
    assert emails == {"admin@email.com", "customer@email.com", "other@email.com"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer abc"},
        {"Authorization": "Basic %%%"},
        {"Authorization": "Basic " + base64.b64encode(b"no-colon").decode()},
    ],
)
async def test_bad_credentials_get_basic_challenge(
    client: httpx.AsyncClient, headers: dict[str, str]
) -> None:
    r = await client.get("/api/users", headers={**JSON, **headers})
    assert r.status_code == 401
    assert r.headers["www-authenticate"] == "Basic"


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_user_look_the_same(client: httpx.AsyncClient) -> None:
    wrong = await client.get("/api/products", headers=basic(ADMIN["email"], "not-the-password"))
    unknown = await client.get("/api/products", headers=basic("ghost@email.com", ADMIN["password"]))
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.content == unknown.content
    assert wrong.headers["www-authenticate"] == unknown.headers["www-authenticate"]


@pytest.mark.asyncio
async def test_view_user(client: httpx.AsyncClient) -> None:
    customer_id = await user_id(client, CUSTOMER["email"])

    r = await client.get(f"/api/users/{customer_id}", headers=auth_as(ADMIN))
    assert r.status_code == 200
    assert r.json()["email"] == CUSTOMER["email"]

    r = await client.get(f"/api/users/{customer_id}", headers=auth_as(CUSTOMER))
    assert r.status_code == 403

    r = await client.get("/api/users/ffffffffffffffffffffffff", headers=auth_as(ADMIN))
    assert r.status_code == 404

    r = await client.get(
        f"/api/users/{customer_id}", headers={**auth_as(ADMIN), "Accept": "text/html"}
    )
    assert r.status_code == 406


@pytest.mark.asyncio
async def test_update_user_role(client: httpx.AsyncClient) -> None:
    customer_id = await user_id(client, CUSTOMER["email"])

    r = await client.put(f"/api/users/{customer_id}", json={"role": "admin"}, headers=auth_as(ADMIN))
    assert r.status_code == 200
    assert r.json()["role"] == "admin"

    # The promotion is persisted: the former customer can now list users.
    r = await client.get("/api/users", headers=auth_as(CUSTOMER))
    assert r.status_code == 200

    r = await client.put(f"/api/users/{customer_id}", json={"role": "root"}, headers=auth_as(ADMIN))
    assert r.status_code == 400
    assert r.json() == {"error": "Unknown role"}

    r = await client.put(f"/api/users/{customer_id}", json={}, headers=auth_as(ADMIN))
    assert r.status_code == 400
    assert r.json() == {"error": "Missing role"}


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"role": "customer"}, {"role": "admin"}, {"name": "Renamed"}, {}])
async def test_admin_cannot_update_self(client: httpx.AsyncClient, body: dict) -> None:
    admin_id = await user_id(client, ADMIN["email"])
    r = await client.put(f"/api/users/{admin_id}", json=body, headers=auth_as(ADMIN))
    assert r.status_code == 400
    assert r.json() == {"error": "Updating own data is not allowed"}


@pytest.mark.asyncio
async def test_delete_user(client: httpx.AsyncClient) -> None:
    admin_id = await user_id(client, ADMIN["email"])
    customer_id = await user_id(client, CUSTOMER["email"])

    r = await client.delete(f"/api/users/{admin_id}", headers=auth_as(ADMIN))
    assert r.status_code == 400
    assert r.json() == {"error": "Deleting own data is not allowed"}

    r = await client.delete(f"/api/users/{customer_id}", headers=auth_as(ADMIN))
    assert r.status_code == 200
    assert r.json()["_id"] == customer_id

    r = await client.delete(f"/api/users/{customer_id}", headers=auth_as(ADMIN))
    assert r.status_code == 404

    # Deleted users can no longer authenticate.
    r = await client.get("/api/products", headers=auth_as(CUSTOMER))
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_users_collection_options_and_405(client: httpx.AsyncClient) -> None:
    r = await client.options("/api/users")
    assert r.status_code == 204
    assert r.headers["access-control-allow-methods"] == "GET"

    r = await client.post("/api/users", json={}, headers=auth_as(ADMIN))
    assert r.status_code == 405

    r = await client.options("/api/userserror")
    assert r.status_code == 404
