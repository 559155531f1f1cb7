from uuid import uuid4

import pytest

from iam.app.use_cases.auth import LoginCommand, LoginUseCase
from iam.app.utils.encryption import decrypt_token
from iam.app.utils.password import hash_password
from iam.domain import errors
from iam.domain.entities import (
    AuthProviderKind,
    MembershipStatus,
    User,
    UserAuthProvider,
    UserProfile,
    UserStatus,
    Workspace,
    WorkspaceMembership,
    WorkspaceRole,
)

TEST_ENCRYPTION_KEY = "0123456789abcdef0123456789abcdef"
PASSWORD = "Password123!"
PASSWORD_HASH = hash_password(PASSWORD)


def _user(status=UserStatus.active):
    user = User(id=uuid4(), email="a@b.com", status=status)
    user.profile = UserProfile(user_id=user.id, first_name="A", last_name="B")
    return user


def _provider(user):
    return UserAuthProvider(
        user_id=user.id,
        provider=AuthProviderKind.local,
        provider_user_id=user.email,
        password_hash=PASSWORD_HASH,
        is_primary=True,
    )


def _use_case(mock_uow, token_codec, mock_token_data, mock_events=None):
    return LoginUseCase(mock_uow, token_codec, mock_token_data, TEST_ENCRYPTION_KEY, mock_events)


@pytest.mark.asyncio
async def test_successful_login(mock_uow, token_codec, mock_token_data, mock_events):
    user = _user()
    mock_uow.users.get_by_email.return_value = user
    mock_uow.users.get_auth_provider.return_value = _provider(user)
    mock_uow.users.get_with_workspaces.return_value = user

    result = await _use_case(mock_uow, token_codec, mock_token_data, mock_events).execute(
        LoginCommand(email="a@b.com", password=PASSWORD)
    )

    assert result.is_ok()
    response = result.value
    assert token_codec.verify(response.access_token) == str(user.id)
    assert decrypt_token(response.encrypted_token, TEST_ENCRYPTION_KEY) == response.access_token
    assert response.user.email == "a@b.com"
    assert response.user.workspace_memberships == []

    mock_uow.users.get_auth_provider.assert_awaited_once_with(user.id, AuthProviderKind.local)
    mock_uow.users.update_last_login.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()

    user_id, encrypted, snapshot = mock_token_data.store_token_data.await_args.args
    assert user_id == str(user.id)
    assert encrypted == response.encrypted_token
    assert snapshot.global_role == "customer"
    assert snapshot.workspace_memberships == []
    assert mock_token_data.store_token_data.await_args.kwargs["ttl"] == token_codec.ttl

    mock_events.dispatch.assert_called_once_with("user.login", {"userId": str(user.id)})


@pytest.mark.asyncio
async def test_login_returns_only_active_memberships(mock_uow, token_codec, mock_token_data):
    user = _user()
    workspace = Workspace(id=uuid4(), name="Acme", slug="acme", owner_id=user.id)
    role = WorkspaceRole(id=uuid4(), workspace_id=workspace.id, name="admin", permissions={"permissions": ["all"]})

    active = WorkspaceMembership(
        id=uuid4(), user_id=user.id, workspace_id=workspace.id, role_id=role.id, status=MembershipStatus.active
    )
    active.workspace = workspace
    active.role = role
    suspended = WorkspaceMembership(
        id=uuid4(), user_id=user.id, workspace_id=uuid4(), role_id=role.id, status=MembershipStatus.suspended
    )
    user.workspace_memberships = [active, suspended]

    mock_uow.users.get_by_email.return_value = user
    mock_uow.users.get_auth_provider.return_value = _provider(user)
    mock_uow.users.get_with_workspaces.return_value = user

    result = await _use_case(mock_uow, token_codec, mock_token_data).execute(
        LoginCommand(email="a@b.com", password=PASSWORD)
    )

    assert result.is_ok()
    memberships = result.value.user.workspace_memberships
    assert len(memberships) == 1
    assert memberships[0].workspace.slug == "acme"
    assert memberships[0].role_name == "admin"
    assert memberships[0].permissions == ["all"]

    snapshot = mock_token_data.store_token_data.await_args.args[2]
    assert [m.workspace_id for m in snapshot.workspace_memberships] == [str(workspace.id)]


@pytest.mark.asyncio
async def test_unknown_email_is_invalid_credentials(mock_uow, token_codec, mock_token_data):
    mock_uow.users.get_by_email.return_value = None

    result = await _use_case(mock_uow, token_codec, mock_token_data).execute(
        LoginCommand(email="nobody@b.com", password=PASSWORD)
    )

    assert result.is_err()
    assert result.error == errors.INVALID_CREDENTIALS
    mock_uow.users.get_auth_provider.assert_not_awaited()


@pytest.mark.asyncio
async def test_wrong_password_is_invalid_credentials(mock_uow, token_codec, mock_token_data):
    user = _user()
    mock_uow.users.get_by_email.return_value = user
    mock_uow.users.get_auth_provider.return_value = _provider(user)

    result = await _use_case(mock_uow, token_codec, mock_token_data).execute(
        LoginCommand(email="a@b.com", password="WrongPassword1!")
    )

    assert result.is_err()
    assert result.error == errors.INVALID_CREDENTIALS
    mock_uow.users.update_last_login.assert_not_awaited()
    mock_token_data.store_token_data.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_local_provider_is_invalid_credentials(mock_uow, token_codec, mock_token_data):
    mock_uow.users.get_by_email.return_value = _user()
    mock_uow.users.get_auth_provider.return_value = None

    result = await _use_case(mock_uow, token_codec, mock_token_data).execute(
        LoginCommand(email="a@b.com", password=PASSWORD)
    )

    assert result.error == errors.INVALID_CREDENTIALS


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [UserStatus.inactive, UserStatus.suspended, UserStatus.pending])
async def test_non_active_user_is_rejected_regardless_of_password(
    mock_uow, token_codec, mock_token_data, status
):
    user = _user(status=status)
    mock_uow.users.get_by_email.return_value = user
    mock_uow.users.get_auth_provider.return_value = _provider(user)

    for password in (PASSWORD, "WrongPassword1!"):
        result = await _use_case(mock_uow, token_codec, mock_token_data).execute(
            LoginCommand(email="a@b.com", password=password)
        )
        assert result.error == errors.USER_INACTIVE


@pytest.mark.asyncio
async def test_last_login_failure_does_not_fail_login(mock_uow, token_codec, mock_token_data):
    user = _user()
    mock_uow.users.get_by_email.return_value = user
    mock_uow.users.get_auth_provider.return_value = _provider(user)
    mock_uow.users.get_with_workspaces.return_value = user
    mock_uow.users.update_last_login.side_effect = RuntimeError("db locked")

    result = await _use_case(mock_uow, token_codec, mock_token_data).execute(
        LoginCommand(email="a@b.com", password=PASSWORD)
    )

    assert result.is_ok()
    mock_uow.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_cache_failure_does_not_fail_login(mock_uow, token_codec, mock_token_data):
    user = _user()
    mock_uow.users.get_by_email.return_value = user
    mock_uow.users.get_auth_provider.return_value = _provider(user)
    mock_uow.users.get_with_workspaces.return_value = user
    mock_token_data.store_token_data.side_effect = ConnectionError("redis down")

    result = await _use_case(mock_uow, token_codec, mock_token_data).execute(
        LoginCommand(email="a@b.com", password=PASSWORD)
    )

    assert result.is_ok()
    assert result.value.access_token


@pytest.mark.asyncio
async def test_bad_encryption_key_fails_authentication(mock_uow, token_codec, mock_token_data):
    user = _user()
    mock_uow.users.get_by_email.return_value = user
    mock_uow.users.get_auth_provider.return_value = _provider(user)

    use_case = LoginUseCase(mock_uow, token_codec, mock_token_data, "too-short")
    result = await use_case.execute(LoginCommand(email="a@b.com", password=PASSWORD))

    assert result.error == errors.AUTHENTICATION_FAILED
    mock_token_data.store_token_data.assert_not_awaited()
