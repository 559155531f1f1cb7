"""
UserProfile Entity

Display attributes of a user, 1:1 with User.
"""

from datetime import date, datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID

from sqlmodel import Column, DateTime, Field, Relationship, SQLModel

from ..base import utcnow

if TYPE_CHECKING:
    from .user import User


class UserProfile(SQLModel, table=True):
    """
    UserProfile entity - owned exclusively by its User.

    Business Rules:
    - Created in the same transaction as the User
    - Removed with the User (cascade)
    """

    __tablename__ = "user_profiles"

    user_id: UUID = Field(foreign_key="users.id", primary_key=True, ondelete="CASCADE")

    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    display_name: Optional[str] = Field(default=None, max_length=200, index=True)
    avatar_url: Optional[str] = Field(default=None, max_length=500)
    date_of_birth: Optional[date] = None

    address_line1: Optional[str] = Field(default=None, max_length=255)
    address_line2: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    postal_code: Optional[str] = Field(default=None, max_length=20)
    country: Optional[str] = Field(default=None, max_length=100, index=True)

    timezone: str = Field(default="UTC", max_length=50)
    locale: str = Field(default="en", max_length=10)
    bio: Optional[str] = None

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, onupdate=utcnow)
    )

    # Relationships
    user: "User" = Relationship(back_populates="profile")
