"""Charity pickup request lifecycle service."""

import logging
import uuid
from datetime import datetime, timezone

from plateshare.auth.capabilities import check_owner
from plateshare.errors import InvalidInput, InvalidTransition, NotFound
from plateshare.models.donation import DonationStatus
from plateshare.models.pickup_request import (
    PickupRequest,
    PickupRequestStatus,
    can_transition,
)
from plateshare.providers.base import DocumentStore
from plateshare.services.donation_service import DonationService

logger = logging.getLogger(__name__)


class PickupRequestService:
    """
    Manages charity claims on donations.

    Lifecycle: Pending -> Accepted | Rejected (restaurant), Accepted -> Picked Up
    (charity). Pickup confirmation cascades to the donation.
    """

    COLLECTION = "requests"

    # Statuses a restaurant may set on a Pending request
    RESTAURANT_DECISIONS = (PickupRequestStatus.ACCEPTED, PickupRequestStatus.REJECTED)

    def __init__(self, store: DocumentStore, donation_service: DonationService):
        """
        Initialize PickupRequestService.

        Args:
            store: Document store instance.
            donation_service: Donation lifecycle, for lookups and the pickup cascade.
        """
        self.store = store
        self.donation_service = donation_service

    async def create(
        self,
        charity_email: str,
        donation_id: str,
        charity_name: str | None = None,
        description: str | None = None,
        pickup_time: str | None = None,
    ) -> PickupRequest:
        """
        Create a Pending request against a Pending donation.

        The restaurant side is taken from the donation, never from the client.

        Raises:
            NotFound: If the donation does not exist.
            InvalidTransition: If the donation is no longer Pending.
        """
        donation = await self.donation_service.require(donation_id)
        if donation.status != DonationStatus.PENDING:
            raise InvalidTransition("Donation is no longer available")

        request = PickupRequest(
            id=str(uuid.uuid4()),
            donation_id=donation.id,
            charity_email=charity_email,
            restaurant_email=donation.restaurant_email,
            status=PickupRequestStatus.PENDING,
            charity_name=charity_name,
            donation_title=donation.title,
            restaurant_name=donation.restaurant_name,
            description=description,
            pickup_time=pickup_time or donation.pickup_time,
            created_at=datetime.now(timezone.utc),
        )
        await self.store.insert(self.COLLECTION, request.id, request.to_firestore())

        logger.info(f"Charity {charity_email} requested donation {donation_id} ({request.id})")
        return request

    async def get(self, request_id: str) -> PickupRequest | None:
        """Get a request by ID."""
        data = await self.store.get(self.COLLECTION, request_id)
        if not data:
            return None
        return PickupRequest.from_firestore(request_id, data)

    async def require(self, request_id: str) -> PickupRequest:
        """Get a request or raise NotFound."""
        request = await self.get(request_id)
        if not request:
            raise NotFound("Request not found")
        return request

    async def get_for_party(self, request_id: str, caller_email: str) -> PickupRequest:
        """Get a request visible to its charity or its restaurant."""
        request = await self.require(request_id)
        check_owner("pickup_requests.get", caller_email, request)
        return request

    async def list_by_charity(self, charity_email: str) -> list[PickupRequest]:
        """List a charity's requests, newest first."""
        docs = await self.store.find(
            self.COLLECTION,
            filters={"charity_email": charity_email},
            order_by="created_at",
            descending=True,
        )
        return [PickupRequest.from_firestore(doc["id"], doc) for doc in docs]

    async def list_by_restaurant(self, restaurant_email: str) -> list[PickupRequest]:
        """List requests on a restaurant's donations, newest first."""
        docs = await self.store.find(
            self.COLLECTION,
            filters={"restaurant_email": restaurant_email},
            order_by="created_at",
            descending=True,
        )
        return [PickupRequest.from_firestore(doc["id"], doc) for doc in docs]

    async def cancel(self, request_id: str, caller_email: str) -> None:
        """
        Delete a Pending request created by the caller.

        Raises:
            NotFound: If the request does not exist.
            Forbidden: If the caller did not create it.
            InvalidTransition: If it is no longer Pending.
        """
        request = await self.require(request_id)
        check_owner("pickup_requests.cancel", caller_email, request)

        if request.status != PickupRequestStatus.PENDING:
            raise InvalidTransition("Only pending requests can be cancelled")

        await self.store.delete(self.COLLECTION, request_id)
        logger.info(f"Request {request_id} cancelled by {caller_email}")

    async def set_status(
        self, request_id: str, caller_email: str, status: PickupRequestStatus
    ) -> PickupRequest:
        """
        Accept or reject a Pending request on the caller's donation.

        Raises:
            InvalidInput: If ``status`` is not Accepted or Rejected.
            NotFound: If the request does not exist.
            Forbidden: If the caller is not the request's restaurant.
            InvalidTransition: If the request is no longer Pending, or it is being
                accepted for a donation that is no longer Pending.
        """
        if status not in self.RESTAURANT_DECISIONS:
            raise InvalidInput("Status must be Accepted or Rejected")

        request = await self.require(request_id)
        check_owner("pickup_requests.set_status", caller_email, request)

        if not can_transition(request.status, status):
            raise InvalidTransition(f"Cannot change a {request.status.value} request to {status.value}")
        if status == PickupRequestStatus.ACCEPTED:
            donation = await self.donation_service.require(request.donation_id)
            if donation.status != DonationStatus.PENDING:
                raise InvalidTransition("Donation is no longer available")

        await self.store.update(self.COLLECTION, request_id, {"status": status.value})
        request.status = status

        logger.info(f"Request {request_id} {status.value.lower()} by {caller_email}")
        return request

    async def confirm_pickup(self, request_id: str, caller_email: str) -> PickupRequest:
        """
        Confirm pickup of an Accepted request.

        The donation is marked Picked Up before the request. There is no
        transaction across the two writes; if the second one is lost, calling
        this again on the request repairs it, since an already Picked Up
        request re-applies both writes.

        Raises:
            NotFound: If the request or its donation does not exist.
            Forbidden: If the caller did not create the request.
            InvalidTransition: If the request was never Accepted, or the donation
                was picked up through another request.
        """
        request = await self.require(request_id)
        check_owner("pickup_requests.confirm_pickup", caller_email, request)

        if request.status != PickupRequestStatus.PICKED_UP and not can_transition(
            request.status, PickupRequestStatus.PICKED_UP
        ):
            raise InvalidTransition("Only accepted requests can be picked up")

        await self.donation_service.mark_picked_up(request.donation_id, request_id)

        data = await self.store.find_one_and_update(
            self.COLLECTION, request_id, {"status": PickupRequestStatus.PICKED_UP.value}
        )
        if not data:
            raise NotFound("Request not found")

        logger.info(f"Pickup confirmed for request {request_id}")
        return PickupRequest.from_firestore(request_id, data)
