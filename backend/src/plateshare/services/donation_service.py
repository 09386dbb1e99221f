"""Donation lifecycle service."""

import logging
import uuid
from datetime import datetime, timezone

from pydantic import ValidationError

from plateshare.auth.capabilities import check_owner
from plateshare.errors import InvalidInput, InvalidTransition, NotFound
from plateshare.models.donation import DONATION_TRANSITIONS, Donation, DonationStatus
from plateshare.models.review import Review
from plateshare.providers.base import DocumentStore
from plateshare.services.review_service import ReviewService

logger = logging.getLogger(__name__)


class DonationService:
    """
    Service for donation listings.

    Donations are created and edited by their restaurant. The only status
    change, Pending -> Picked Up, is applied by pickup confirmation through
    ``mark_picked_up``; clients cannot write ``status``.
    """

    COLLECTION = "donations"

    # Fields the owning restaurant may change
    EDITABLE_FIELDS = frozenset(
        {
            "title",
            "food_type",
            "quantity",
            "pickup_time",
            "restaurant_name",
            "location",
            "image_url",
        }
    )

    def __init__(self, store: DocumentStore, review_service: ReviewService):
        """
        Initialize DonationService.

        Args:
            store: Document store instance.
            review_service: Used to attach reviews to a donation.
        """
        self.store = store
        self.review_service = review_service

    async def create(
        self,
        restaurant_email: str,
        title: str,
        food_type: str,
        quantity: int | str,
        pickup_time: str,
        restaurant_name: str,
        location: str,
        image_url: str | None = None,
    ) -> Donation:
        """
        Create a donation owned by ``restaurant_email`` with status Pending.

        Raises:
            InvalidInput: If any required field is empty.
        """
        required = (title, food_type, quantity, pickup_time, restaurant_name, location)
        if any(value in (None, "") for value in required):
            raise InvalidInput("All required fields must be provided")

        donation = Donation(
            id=str(uuid.uuid4()),
            title=title,
            food_type=food_type,
            quantity=quantity,
            pickup_time=pickup_time,
            restaurant_name=restaurant_name,
            restaurant_email=restaurant_email,
            location=location,
            image_url=image_url or None,
            status=DonationStatus.PENDING,
            created_at=datetime.now(timezone.utc),
        )
        await self.store.insert(self.COLLECTION, donation.id, donation.to_firestore())

        logger.info(f"Created donation {donation.id} for {restaurant_email}")
        return donation

    async def get(self, donation_id: str) -> Donation | None:
        """Get a donation by ID."""
        data = await self.store.get(self.COLLECTION, donation_id)
        if not data:
            return None
        return Donation.from_firestore(donation_id, data)

    async def require(self, donation_id: str) -> Donation:
        """Get a donation or raise NotFound."""
        donation = await self.get(donation_id)
        if not donation:
            raise NotFound("Donation not found")
        return donation

    async def list_all(self) -> list[Donation]:
        """List every donation."""
        docs = await self.store.find(self.COLLECTION, order_by="created_at")
        return [Donation.from_firestore(doc["id"], doc) for doc in docs]

    async def list_by_restaurant(self, restaurant_email: str) -> list[Donation]:
        """List donations posted by one restaurant."""
        docs = await self.store.find(
            self.COLLECTION,
            filters={"restaurant_email": restaurant_email.lower()},
            order_by="created_at",
        )
        return [Donation.from_firestore(doc["id"], doc) for doc in docs]

    async def get_with_reviews(self, donation_id: str) -> tuple[Donation, list[Review]]:
        """Get a donation together with its reviews."""
        donation = await self.require(donation_id)
        reviews = await self.review_service.list_by_donation(donation_id)
        return donation, reviews

    async def update(self, donation_id: str, caller_email: str, changes: dict) -> Donation:
        """
        Apply a partial update from the owning restaurant.

        Raises:
            NotFound: If the donation does not exist.
            Forbidden: If the caller does not own the donation.
            InvalidInput: If a non-editable field is included.
        """
        donation = await self.require(donation_id)
        check_owner("donations.update", caller_email, donation)

        rejected = set(changes) - self.EDITABLE_FIELDS
        if rejected:
            raise InvalidInput(f"Fields cannot be updated: {', '.join(sorted(rejected))}")
        if not changes:
            return donation

        try:
            updated = Donation.model_validate({**donation.model_dump(), **changes})
        except ValidationError as e:
            raise InvalidInput(f"Invalid donation fields: {e.error_count()} error(s)") from e
        patch = {field: value for field, value in updated.to_firestore().items() if field in changes}
        await self.store.update(self.COLLECTION, donation_id, patch)

        logger.info(f"Updated donation {donation_id}: {sorted(changes)}")
        return updated

    async def delete(self, donation_id: str, caller_email: str) -> None:
        """
        Delete a donation owned by the caller.

        Raises:
            NotFound: If the donation does not exist.
            Forbidden: If the caller does not own the donation.
        """
        donation = await self.require(donation_id)
        check_owner("donations.delete", caller_email, donation)

        await self.store.delete(self.COLLECTION, donation_id)
        logger.info(f"Deleted donation {donation_id}")

    async def mark_picked_up(self, donation_id: str, request_id: str) -> Donation:
        """
        Move a donation to Picked Up on behalf of pickup request ``request_id``.

        Re-applying for the same request is a no-op write, so an interrupted
        pickup cascade can be driven again.

        Raises:
            NotFound: If the donation does not exist.
            InvalidTransition: If the donation cannot reach Picked Up, or was
                picked up through another request.
        """
        donation = await self.require(donation_id)
        if donation.status == DonationStatus.PICKED_UP:
            if donation.picked_up_by != request_id:
                raise InvalidTransition("Donation has already been picked up")
        elif DonationStatus.PICKED_UP not in DONATION_TRANSITIONS[donation.status]:
            raise InvalidTransition(f"Donation is {donation.status.value}")

        await self.store.update(
            self.COLLECTION,
            donation_id,
            {"status": DonationStatus.PICKED_UP.value, "picked_up_by": request_id},
        )
        donation.status = DonationStatus.PICKED_UP
        donation.picked_up_by = request_id
        logger.info(f"Donation {donation_id} picked up through request {request_id}")
        return donation
