"""Data models for PlateShare."""

from plateshare.models.donation import Donation, DonationStatus
from plateshare.models.pickup_request import PickupRequest, PickupRequestStatus
from plateshare.models.review import Review
from plateshare.models.transaction import Transaction
from plateshare.models.upgrade_request import (
    CharityRequest,
    RestaurantRequest,
    UpgradeRequestStatus,
)
from plateshare.models.user import User, UserRole

__all__ = [
    # User
    "User",
    "UserRole",
    # Donation
    "Donation",
    "DonationStatus",
    # Pickup requests
    "PickupRequest",
    "PickupRequestStatus",
    # Role-upgrade requests
    "CharityRequest",
    "RestaurantRequest",
    "UpgradeRequestStatus",
    # Other
    "Review",
    "Transaction",
]
