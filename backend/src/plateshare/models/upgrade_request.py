"""Role-upgrade request models (charity and restaurant tracks)."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import Field

from plateshare.models.base import StoredModel


class UpgradeRequestStatus(str, Enum):
    """Role-upgrade request status."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


# Statuses that block a new submission for the same applicant
OUTSTANDING_STATUSES = (UpgradeRequestStatus.PENDING, UpgradeRequestStatus.APPROVED)


class CharityRequest(StoredModel):
    """Application to be granted the charity role."""

    id: str
    email: str
    name: str
    organization: str
    mission: str
    amount: float | None = None
    transaction_id: str | None = None
    status: UpgradeRequestStatus = UpgradeRequestStatus.PENDING
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def applicant_email(self) -> str:
        return self.email


class RestaurantRequest(StoredModel):
    """Application to be granted the restaurant role."""

    id: str
    restaurant_name: str
    about: str
    location: str
    opening_time: str
    closing_time: str
    food_type: str
    image_url: str | None = None
    owner_email: str
    restaurant_email: str
    phone: str
    status: UpgradeRequestStatus = UpgradeRequestStatus.PENDING
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def applicant_email(self) -> str:
        return self.owner_email
