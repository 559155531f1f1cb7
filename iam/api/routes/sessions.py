from fastapi import APIRouter, Depends, status

from iam.api.error import to_http_error
from iam.app.use_cases.auth import AuthenticatedUser, TokenDataService
from iam.app.use_cases.users import RevokeSessionsResponse, RevokeSessionsUseCase
from iam.depends import get_current_user, get_token_data_service

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.post(
    "/revoke-all",
    status_code=status.HTTP_200_OK,
    response_model=RevokeSessionsResponse,
)
async def revoke_all_sessions(
    current_user: AuthenticatedUser = Depends(get_current_user),
    token_data: TokenDataService = Depends(get_token_data_service),
):
    """
    Revoke All Sessions

    Drops every cached session snapshot of the caller.

    Raises:
        - 500 Internal Server Error: Session cache unavailable
    """
    result = await RevokeSessionsUseCase(token_data).execute(current_user.id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
