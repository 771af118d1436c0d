import pytest
from httpx import AsyncClient

from src.api.utils.jwt import verify_jwt
from tests.integration.helpers import V1, bearer, register
from tests.utils.json_compare import exclude_keys


@pytest.mark.asyncio
async def test_register_returns_tokens_and_public_user(client: AsyncClient, test_data):
    """Register creates the account and signs it in"""
    payload = test_data.get_copy("manager")

    response = await client.post(f"{V1}/auth/register", json=payload)

    assert response.status_code == 201
    data = response.json()
    assert set(data.keys()) == {"accessToken", "refreshToken", "expiresAt", "user"}
    assert exclude_keys(data["user"], {"id"}) == {
        "username": "m1",
        "role": "manager",
        "age": 30,
    }
    assert len(data["refreshToken"].split(".")) == 3

    claims = verify_jwt(data["accessToken"])
    assert claims["sub"] == data["user"]["id"]
    assert claims["role"] == "manager"
    assert claims["sid"]


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient, test_data):
    """Registering the same username twice yields Conflict the second time"""
    payload = test_data.get_copy("customer")
    first = await client.post(f"{V1}/auth/register", json=payload)
    assert first.status_code == 201

    second = await client.post(f"{V1}/auth/register", json=payload)

    assert second.status_code == 409
    assert second.json()["error"]["code"] == "USERNAME_ALREADY_EXISTS"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override",
    [
        {"password": "short1"},
        {"password": "NoDigitsHere"},
        {"password": "a1" * 40},
        {"role": "admin"},
        {"username": "a"},
        {"age": -1},
    ],
)
async def test_register_validation_errors(client: AsyncClient, test_data, override):
    payload = test_data.get_copy("customer")
    payload.update(override)

    response = await client.post(f"{V1}/auth/register", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_register_missing_field(client: AsyncClient):
    response = await client.post(f"{V1}/auth/register", json={"username": "nobody"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_register_then_login(client: AsyncClient, test_data):
    """Login with the registered credentials yields a usable access token"""
    payload = test_data.get_copy("customer")
    registered = await register(client, payload["username"], password=payload["password"])

    response = await client.post(f"{V1}/auth/login", json={
        "username": payload["username"],
        "password": payload["password"],
    })

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["id"] == registered["user"]["id"]

    me = await client.get(f"{V1}/users/{data['user']['id']}", headers=bearer(data["accessToken"]))
    assert me.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "username,password",
    [("c1", "WrongPassword1"), ("ghost", "Password1"), ("c1", "a1" * 40)],
)
async def test_login_invalid_credentials(client: AsyncClient, username, password):
    """Wrong password and unknown user answer the same 401"""
    await register(client, "c1")

    response = await client.post(f"{V1}/auth/login", json={
        "username": username,
        "password": password,
    })

    assert response.status_code == 401
    assert response.json()["error"] == {
        "code": "INVALID_CREDENTIALS",
        "message": "Invalid credentials",
    }


@pytest.mark.asyncio
async def test_refresh_issues_new_access_token(client: AsyncClient):
    registered = await register(client, "c1")

    response = await client.post(f"{V1}/auth/refresh", json={
        "refreshToken": registered["refreshToken"],
    })

    assert response.status_code == 200
    data = response.json()
    assert data["refreshToken"] == registered["refreshToken"]
    assert verify_jwt(data["accessToken"])["sid"] == verify_jwt(registered["accessToken"])["sid"]


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["not-a-jwt", "a.b.c"])
async def test_refresh_rejects_unknown_tokens(client: AsyncClient, token):
    response = await client.post(f"{V1}/auth/refresh", json={"refreshToken": token})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_REFRESH_TOKEN"


@pytest.mark.asyncio
async def test_logout_revokes_every_session(client: AsyncClient):
    """Logout revokes all sessions and refresh tokens of the user"""
    registered = await register(client, "c1")
    login = await client.post(f"{V1}/auth/login", json={
        "username": "c1",
        "password": "Password1",
    })
    assert login.status_code == 200
    logged_in = login.json()

    response = await client.post(f"{V1}/auth/logout", headers=bearer(logged_in["accessToken"]))
    assert response.status_code == 204

    for refresh_token in (registered["refreshToken"], logged_in["refreshToken"]):
        refreshed = await client.post(f"{V1}/auth/refresh", json={"refreshToken": refresh_token})
        assert refreshed.status_code == 401
        assert refreshed.json()["error"]["code"] == "INVALID_REFRESH_TOKEN"

    # Session behind the register token is revoked too
    again = await client.post(f"{V1}/auth/logout", headers=bearer(registered["accessToken"]))
    assert again.status_code == 401
    assert again.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_logout_requires_token(client: AsyncClient):
    response = await client.post(f"{V1}/auth/logout")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_logout_with_garbage_token(client: AsyncClient):
    response = await client.post(f"{V1}/auth/logout", headers=bearer("x.y.z"))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_logout_with_refresh_token(client: AsyncClient):
    """A refresh token is not accepted where an access token is expected"""
    registered = await register(client, "c1")

    response = await client.post(f"{V1}/auth/logout", headers=bearer(registered["refreshToken"]))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"
    # Nothing was revoked
    refreshed = await client.post(f"{V1}/auth/refresh", json={"refreshToken": registered["refreshToken"]})
    assert refreshed.status_code == 200


@pytest.mark.asyncio
async def test_protected_route_rejects_refresh_token(client: AsyncClient):
    registered = await register(client, "c1")

    response = await client.get(f"{V1}/movies", headers=bearer(registered["refreshToken"]))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"
    ok = await client.get(f"{V1}/movies", headers=bearer(registered["accessToken"]))
    assert ok.status_code == 200
