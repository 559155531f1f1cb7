from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from iam.api.error import to_http_error
from iam.app.services.event_publisher import IEventBus
from iam.app.services.unit_of_work import UnitOfWork
from iam.app.use_cases.auth import AuthenticatedUser
from iam.app.use_cases.workspaces import (
    CreateWorkspaceCommand,
    CreateWorkspaceUseCase,
    WorkspaceResponse,
)
from iam.depends import get_event_bus, get_unit_of_work, require_super_admin

router = APIRouter(prefix="/admin", tags=["Admin"])


class CreateWorkspaceRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Workspace name")
    description: Optional[str] = Field(None, description="Workspace description")


@router.post(
    "/workspaces",
    status_code=status.HTTP_201_CREATED,
    response_model=WorkspaceResponse,
)
async def create_workspace(
    request: CreateWorkspaceRequest,
    current_user: AuthenticatedUser = Depends(require_super_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    events: IEventBus = Depends(get_event_bus),
):
    """
    Create Workspace (super admin only)

    Creates the workspace, its admin role and the caller's membership in one
    transaction.

    Raises:
        - 401 Unauthorized: Missing or invalid token
        - 403 Forbidden: Caller is not super admin
        - 500 Internal Server Error: Slug space exhausted or transaction failed
    """
    command = CreateWorkspaceCommand(
        acting_user_id=current_user.id,
        name=request.name,
        description=request.description,
    )
    result = await CreateWorkspaceUseCase(uow, events).execute(command)

    if result.is_err():
        raise to_http_error(result.error)

    return result.value
