"""
User Management DTOs
"""

from uuid import UUID

from pydantic import BaseModel


class ChangePasswordCommand(BaseModel):
    user_id: UUID
    current_password: str
    new_password: str


class RevokeSessionsResponse(BaseModel):
    user_id: str
    revoked_count: int
