"""
Tests for authentication dependencies and JWT claim handling.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from jose import jwt

from fileservice.auth.jwt import extract_user_claims, get_rsa_key, validate_token
from fileservice.config import Settings
from fileservice.core.exceptions import UnauthorizedException
from fileservice.main import create_app


@pytest_asyncio.fixture
async def make_client(database):
    """Build a client for an app created with the given settings, auth not overridden."""
    clients = []

    async def _make_client(settings: Settings) -> AsyncClient:
        app = create_app(settings)
        app.state.database = database
        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield _make_client

    for client in clients:
        await client.aclose()


@pytest.mark.asyncio
async def test_dev_mode_uses_configured_user(make_client, database_url):
    client = await make_client(
        Settings(CONNECTION_STRING=database_url, DEV_MODE=True, DEV_USER_ROLES=["Editor"])
    )

    response = await client.get("/Files")

    assert response.status_code == 200
    assert response.json()["info"] == ["No Data Available"]


@pytest.mark.asyncio
async def test_dev_mode_roles_still_apply(make_client, database_url):
    client = await make_client(
        Settings(CONNECTION_STRING=database_url, DEV_MODE=True, DEV_USER_ROLES=["Author"])
    )

    response = await client.get("/Files")

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_missing_authorization_header(make_client, database_url):
    client = await make_client(Settings(CONNECTION_STRING=database_url, DEV_MODE=False))

    response = await client.get("/Files")

    assert response.status_code == 401
    assert response.json()["message"] == "Authorization header required"


@pytest.mark.asyncio
async def test_malformed_authorization_header(make_client, database_url):
    client = await make_client(Settings(CONNECTION_STRING=database_url, DEV_MODE=False))

    response = await client.get("/Files", headers={"Authorization": "Basic dXNlcjpwYXNz"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid authorization header format"


@pytest.mark.asyncio
async def test_health_does_not_require_authentication(make_client, database_url):
    client = await make_client(Settings(CONNECTION_STRING=database_url, DEV_MODE=False))

    response = await client.get("/health")

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_token_without_key_id_is_rejected():
    token = jwt.encode({"sub": "user-1"}, "secret", algorithm="HS256")

    with pytest.raises(UnauthorizedException) as exc_info:
        await validate_token(token, Settings())

    assert exc_info.value.message == "Token missing key ID"


@pytest.mark.asyncio
async def test_garbage_token_is_rejected():
    with pytest.raises(UnauthorizedException):
        await validate_token("not-a-jwt", Settings())


class TestClaims:
    """Tests for extract_user_claims and key lookup."""

    def test_roles_list(self):
        claims = extract_user_claims({
            "sub": "user-1",
            "email": "user@example.com",
            "roles": ["Editor", "Author"],
            "exp": 1700000000,
        })

        assert claims["user_id"] == "user-1"
        assert claims["email"] == "user@example.com"
        assert claims["roles"] == ["Editor", "Author"]
        assert claims["exp"] == 1700000000

    def test_single_role_string(self):
        claims = extract_user_claims({"sub": "user-1", "role": "SystemAdministrator"})

        assert claims["roles"] == ["SystemAdministrator"]

    def test_no_roles(self):
        assert extract_user_claims({"sub": "user-1"})["roles"] == []

    def test_get_rsa_key(self):
        jwks = {"keys": [
            {"kid": "a", "kty": "RSA", "use": "sig", "n": "n-a", "e": "AQAB"},
            {"kid": "b", "kty": "RSA", "use": "sig", "n": "n-b", "e": "AQAB"},
        ]}

        assert get_rsa_key(jwks, "b")["n"] == "n-b"
        assert get_rsa_key(jwks, "c") is None
