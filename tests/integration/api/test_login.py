import pytest
from httpx import AsyncClient
from sqlalchemy import update

from iam.app.use_cases.auth import UserTokenData
from iam.app.utils.encryption import decrypt_token
from iam.depends import token_codec
from iam.domain.entities import User, UserStatus
from tests.integration.helpers import login, set_cookies, signup
from config import ApplicationConfig


@pytest.mark.asyncio
async def test_successful_login(client: AsyncClient, session_cache, event_bus):
    await signup(client, "a@b.com")

    response = await login(client, "a@b.com")

    assert response.status_code == 200
    data = response.json()
    user_id = data["user"]["id"]
    assert data["user"]["email"] == "a@b.com"
    assert data["user"]["workspace_memberships"] == []
    assert data["user"]["last_login_at"] is not None

    cookies = set_cookies(response)
    access_token = cookies["access_token"].value
    encrypted_token = cookies["encrypted_token"].value
    assert token_codec.verify(access_token) == user_id
    assert decrypt_token(encrypted_token, ApplicationConfig.ENCRYPTION_KEY) == access_token
    assert cookies["access_token"]["max-age"] == str(ApplicationConfig.JWT_EXPIRATION_SECONDS)
    assert cookies["access_token"]["httponly"]
    assert cookies["access_token"]["samesite"].lower() == "strict"

    # Snapshot cached under (user, encrypted token)
    assert session_cache.keys_for(user_id) == [encrypted_token]
    payload, ttl = session_cache.entries[(user_id, encrypted_token)]
    snapshot = UserTokenData.model_validate_json(payload)
    assert snapshot.global_role == "customer"
    assert snapshot.workspace_memberships == []
    assert ttl == ApplicationConfig.JWT_EXPIRATION_SECONDS

    assert event_bus.topics() == ["user.created", "user.login"]


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, session_cache):
    await signup(client, "a@b.com")

    response = await login(client, "a@b.com", password="WrongPassword1!")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"
    assert "set-cookie" not in response.headers
    assert session_cache.entries == {}


@pytest.mark.asyncio
async def test_login_unknown_email_same_error(client: AsyncClient):
    response = await login(client, "nobody@b.com")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_login_inactive_user(client: AsyncClient, db_session):
    await signup(client, "a@b.com")
    await db_session.execute(
        update(User).where(User.email == "a@b.com").values(status=UserStatus.inactive)
    )
    await db_session.commit()

    for password in ("Password123!", "WrongPassword1!"):
        response = await login(client, "a@b.com", password=password)
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "USER_INACTIVE"
