"""Services for PlateShare."""

from plateshare.services.donation_service import DonationService
from plateshare.services.pickup_request_service import PickupRequestService
from plateshare.services.review_service import ReviewService
from plateshare.services.transaction_service import TransactionService
from plateshare.services.upgrade_request_service import (
    CharityRequestService,
    RestaurantRequestService,
    UpgradeRequestService,
)
from plateshare.services.user_service import UserService

__all__ = [
    "CharityRequestService",
    "DonationService",
    "PickupRequestService",
    "RestaurantRequestService",
    "ReviewService",
    "TransactionService",
    "UpgradeRequestService",
    "UserService",
]
