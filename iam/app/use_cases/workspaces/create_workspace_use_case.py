"""
Create Workspace Use Case

Provisions a workspace together with its admin role and the creator's
membership in a single transaction.
"""

import logging
from typing import Optional

from iam.app.services.event_publisher import WORKSPACE_CREATED, IEventBus
from iam.app.services.unit_of_work import UnitOfWork
from iam.app.utils.slug import SlugGenerationError, generate_unique_slug
from iam.domain import errors
from iam.domain.base import utcnow
from iam.domain.entities import (
    ADMIN_ROLE_NAME,
    PERMISSION_ALL,
    GlobalRole,
    MembershipStatus,
    PermissionMetadata,
    RolePermissions,
    UserStatus,
    Workspace,
    WorkspaceMembership,
    WorkspaceRole,
    WorkspaceStatus,
)
from iam.domain.result import Result, Return

from .dtos import CreateWorkspaceCommand, WorkspaceResponse, WorkspaceRoleInfo

logger = logging.getLogger(__name__)


class CreateWorkspaceUseCase:
    """
    Use case for workspace provisioning.

    Business Rules (checked in order):
    - Acting user must exist (USER_NOT_FOUND)
    - Acting user must be active (USER_INACTIVE)
    - Acting user must be super_admin (WORKSPACE_CREATE_FORBIDDEN)
    - Slug is derived from the name; collisions get -1, -2, ... up to 1000
      (WORKSPACE_SLUG_GENERATION_FAILED beyond that)
    - Workspace, admin role (["all"]) and active owner membership are
      committed together or not at all (WORKSPACE_CREATE_FAILED)
    - workspace.created is emitted only after commit, fire-and-forget
    """

    def __init__(self, uow: UnitOfWork, events: Optional[IEventBus] = None):
        self.uow = uow
        self.events = events

    async def execute(self, command: CreateWorkspaceCommand) -> Result[WorkspaceResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(command.acting_user_id)
            if user is None:
                return Return.err(errors.USER_NOT_FOUND)

            if user.status != UserStatus.active:
                return Return.err(errors.USER_INACTIVE)

            if user.global_role != GlobalRole.super_admin:
                return Return.err(errors.WORKSPACE_CREATE_FORBIDDEN)

            try:
                slug = await generate_unique_slug(command.name, self.uow.workspaces.exists_by_slug)
            except SlugGenerationError:
                logger.exception("Slug generation failed for workspace %r", command.name)
                return Return.err(errors.WORKSPACE_SLUG_GENERATION_FAILED)

            now = utcnow()
            try:
                workspace = await self.uow.workspaces.create(
                    Workspace(
                        name=command.name,
                        slug=slug,
                        description=command.description,
                        owner_id=user.id,
                        settings={},
                        status=WorkspaceStatus.active,
                        created_at=now,
                        updated_at=now,
                    )
                )

                permission_set = RolePermissions(
                    permissions=[PERMISSION_ALL],
                    metadata=PermissionMetadata(
                        created_by="system",
                        updated_by="system",
                        updated_at=now,
                        description="Full administrative access",
                    ),
                )
                role = await self.uow.workspaces.create_role(
                    WorkspaceRole(
                        workspace_id=workspace.id,
                        name=ADMIN_ROLE_NAME,
                        description="Workspace administrator",
                        permissions=WorkspaceRole.dump_permissions(permission_set),
                        status=WorkspaceStatus.active,
                    )
                )

                membership = await self.uow.workspaces.create_membership(
                    WorkspaceMembership(
                        user_id=user.id,
                        workspace_id=workspace.id,
                        role_id=role.id,
                        status=MembershipStatus.active,
                        joined_at=now,
                    )
                )

                await self.uow.commit()
            except Exception:
                logger.exception("Failed to create workspace %r for user %s", command.name, user.id)
                await self.uow.rollback()
                return Return.err(errors.WORKSPACE_CREATE_FAILED)

            response = WorkspaceResponse(
                id=str(workspace.id),
                name=workspace.name,
                slug=workspace.slug,
                description=workspace.description,
                owner_id=str(workspace.owner_id),
                status=workspace.status.value,
                created_at=workspace.created_at,
                admin_role=WorkspaceRoleInfo(
                    id=str(role.id),
                    name=role.name,
                    permissions=permission_set.permissions,
                ),
                membership_id=str(membership.id),
            )

        if self.events is not None:
            self.events.dispatch(
                WORKSPACE_CREATED,
                {
                    "workspaceId": response.id,
                    "name": response.name,
                    "slug": response.slug,
                    "createdBy": response.owner_id,
                },
            )

        return Return.ok(response)
