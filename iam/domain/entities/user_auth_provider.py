"""
UserAuthProvider Entity

One row per (user, provider) pair.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, Relationship, SQLModel

from ..base import utcnow
from .enums import AuthProviderKind

if TYPE_CHECKING:
    from .user import User


class UserAuthProvider(SQLModel, table=True):
    """
    UserAuthProvider entity - links a user to an identity provider.

    Business Rules:
    - (user_id, provider) is unique
    - Only the local provider carries a password hash (bcrypt)
    - provider_data is free-form provider metadata
    """

    __tablename__ = "user_auth_providers"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, ondelete="CASCADE")
    provider: AuthProviderKind = Field(nullable=False)

    provider_user_id: str = Field(max_length=255)
    provider_email: Optional[str] = Field(default=None, max_length=255, index=True)
    provider_data: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    password_hash: Optional[str] = Field(default=None, max_length=255)
    is_primary: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, onupdate=utcnow)
    )

    # Relationships
    user: "User" = Relationship(back_populates="auth_providers")

    __table_args__ = (
        Index("idx_user_provider", "user_id", "provider", unique=True),
    )
