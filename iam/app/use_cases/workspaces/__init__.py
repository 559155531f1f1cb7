from .create_workspace_use_case import CreateWorkspaceUseCase
from .dtos import CreateWorkspaceCommand, WorkspaceResponse, WorkspaceRoleInfo

__all__ = [
    "CreateWorkspaceUseCase",
    "CreateWorkspaceCommand",
    "WorkspaceResponse",
    "WorkspaceRoleInfo",
]
