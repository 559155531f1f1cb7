from datetime import timedelta
from uuid import uuid4

import pytest

from iam.app.use_cases.auth import ValidateTokenUseCase
from iam.app.utils.jwt import TokenCodec
from iam.domain import errors
from iam.domain.entities import GlobalRole, User, UserStatus


@pytest.mark.asyncio
async def test_valid_token_for_active_user(mock_uow, token_codec):
    user = User(id=uuid4(), email="a@b.com", status=UserStatus.active, global_role=GlobalRole.super_admin)
    mock_uow.users.get_by_id.return_value = user

    result = await ValidateTokenUseCase(mock_uow, token_codec).execute(token_codec.issue(str(user.id)))

    assert result.is_ok()
    assert result.value.id == user.id
    assert result.value.is_super_admin
    mock_uow.users.get_by_id.assert_awaited_once_with(user.id)


@pytest.mark.asyncio
async def test_deleted_user_is_not_found(mock_uow, token_codec):
    # Deleted users are filtered out by the repository
    mock_uow.users.get_by_id.return_value = None

    result = await ValidateTokenUseCase(mock_uow, token_codec).execute(token_codec.issue(str(uuid4())))

    assert result.error == errors.USER_NOT_FOUND


@pytest.mark.asyncio
async def test_inactive_user_is_rejected(mock_uow, token_codec):
    user = User(id=uuid4(), email="a@b.com", status=UserStatus.suspended)
    mock_uow.users.get_by_id.return_value = user

    result = await ValidateTokenUseCase(mock_uow, token_codec).execute(token_codec.issue(str(user.id)))

    assert result.error == errors.USER_INACTIVE


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "make_token",
    [
        lambda codec: codec.issue(str(uuid4()), ttl=timedelta(hours=-1)),
        lambda codec: TokenCodec(secret="other", ttl=timedelta(hours=1)).issue(str(uuid4())),
        lambda codec: "garbage",
        lambda codec: codec.issue("not-a-uuid"),
    ],
)
async def test_codec_failures_collapse_to_token_invalid(mock_uow, token_codec, make_token):
    result = await ValidateTokenUseCase(mock_uow, token_codec).execute(make_token(token_codec))

    assert result.error == errors.TOKEN_INVALID
    mock_uow.users.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_empty_token_is_required(mock_uow, token_codec):
    result = await ValidateTokenUseCase(mock_uow, token_codec).execute("")

    assert result.error == errors.TOKEN_REQUIRED


@pytest.mark.asyncio
async def test_store_errors_propagate(mock_uow, token_codec):
    mock_uow.users.get_by_id.side_effect = RuntimeError("db down")

    with pytest.raises(RuntimeError):
        await ValidateTokenUseCase(mock_uow, token_codec).execute(token_codec.issue(str(uuid4())))
