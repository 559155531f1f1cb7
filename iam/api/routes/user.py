from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from iam.api.error import to_http_error
from iam.app.services.unit_of_work import UnitOfWork
from iam.app.use_cases.auth import AuthenticatedUser, ProfileInfo, TokenDataService, UserInfo
from iam.app.use_cases.users import (
    ChangePasswordCommand,
    ChangePasswordUseCase,
    DeleteUserUseCase,
    LoadUserUseCase,
)
from iam.depends import get_current_user, get_token_data_service, get_unit_of_work

router = APIRouter(prefix="/users", tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def get_me(
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Current user with profile and all workspace memberships"""
    result = await LoadUserUseCase(uow).with_workspaces(current_user.id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.get("/me/profile", status_code=status.HTTP_200_OK, response_model=ProfileInfo)
async def get_my_profile(
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await LoadUserUseCase(uow).profile(current_user.id)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value


@router.delete("/me", status_code=status.HTTP_200_OK)
async def delete_me(
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_data: TokenDataService = Depends(get_token_data_service),
):
    """
    Soft-delete the current user

    Issued tokens stop working immediately because validation no longer finds
    the user.
    """
    result = await DeleteUserUseCase(uow, token_data).execute(current_user.id)

    if result.is_err():
        raise to_http_error(result.error)

    return {"message": "User deleted"}


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., description="Current password")
    new_password: str = Field(..., description="New password")


@router.post("/me/password", status_code=status.HTTP_200_OK)
async def change_password(
    request: ChangePasswordRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_data: TokenDataService = Depends(get_token_data_service),
):
    """
    Change password

    Raises:
        - 400 Bad Request: New password too weak (PASSWORD_*)
        - 401 Unauthorized: Current password is wrong
    """
    command = ChangePasswordCommand(
        user_id=current_user.id,
        current_password=request.current_password,
        new_password=request.new_password,
    )
    result = await ChangePasswordUseCase(uow, token_data).execute(command)

    if result.is_err():
        raise to_http_error(result.error)

    return {"message": "Password changed"}
