"""Donation model and lifecycle."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import Field

from plateshare.models.base import StoredModel


class DonationStatus(str, Enum):
    """Donation status. Moves to PICKED_UP only through a confirmed pickup."""

    PENDING = "Pending"
    PICKED_UP = "Picked Up"


DONATION_TRANSITIONS: dict[DonationStatus, set[DonationStatus]] = {
    DonationStatus.PENDING: {DonationStatus.PICKED_UP},
    DonationStatus.PICKED_UP: set(),
}


class Donation(StoredModel):
    """Surplus food listing posted by a restaurant."""

    id: str
    title: str
    food_type: str
    quantity: int | str
    pickup_time: str
    restaurant_name: str
    restaurant_email: str
    location: str
    image_url: str | None = None
    status: DonationStatus = DonationStatus.PENDING
    # Pickup request whose confirmation moved the donation to Picked Up
    picked_up_by: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
