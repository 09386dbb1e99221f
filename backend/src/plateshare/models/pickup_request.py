"""Charity pickup request model and lifecycle."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import Field

from plateshare.models.base import StoredModel


class PickupRequestStatus(str, Enum):
    """Pickup request status."""

    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    PICKED_UP = "Picked Up"


PICKUP_REQUEST_TRANSITIONS: dict[PickupRequestStatus, set[PickupRequestStatus]] = {
    PickupRequestStatus.PENDING: {PickupRequestStatus.ACCEPTED, PickupRequestStatus.REJECTED},
    PickupRequestStatus.ACCEPTED: {PickupRequestStatus.PICKED_UP},
    PickupRequestStatus.REJECTED: set(),
    PickupRequestStatus.PICKED_UP: set(),
}


def can_transition(current: PickupRequestStatus, target: PickupRequestStatus) -> bool:
    """Check whether a request may move from ``current`` to ``target``."""
    return target in PICKUP_REQUEST_TRANSITIONS[current]


class PickupRequest(StoredModel):
    """A charity's claim on a donation."""

    id: str
    donation_id: str
    charity_email: str
    restaurant_email: str
    status: PickupRequestStatus = PickupRequestStatus.PENDING
    charity_name: str | None = None
    donation_title: str | None = None
    restaurant_name: str | None = None
    description: str | None = None
    pickup_time: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
