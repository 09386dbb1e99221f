"""User model and roles."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import EmailStr, Field

from plateshare.models.base import StoredModel


class UserRole(str, Enum):
    """User role."""

    USER = "user"
    CHARITY = "charity"
    RESTAURANT = "restaurant"
    ADMIN = "admin"


class User(StoredModel):
    """Registered user."""

    id: str = Field(..., description="Document ID")
    email: EmailStr = Field(..., description="User email address")
    name: str = Field(..., description="Display name")
    profile_link: str | None = Field(None, description="Profile picture or page URL")
    role: UserRole = Field(default=UserRole.USER, description="User role")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Registration date"
    )
