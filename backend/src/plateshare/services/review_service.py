"""Donation review service."""

import logging
import uuid
from datetime import datetime, timezone

from plateshare.errors import InvalidInput
from plateshare.models.review import Review
from plateshare.providers.base import DocumentStore

logger = logging.getLogger(__name__)


class ReviewService:
    """Stores reviews; any number per donation and reviewer."""

    COLLECTION = "reviews"

    def __init__(self, store: DocumentStore):
        """Initialize ReviewService."""
        self.store = store

    async def add(
        self, donation_id: str, reviewer_name: str, description: str, rating: float | str
    ) -> Review:
        """Add a review. All fields are required; rating must be numeric."""
        if not donation_id or not reviewer_name or not description or rating in (None, ""):
            raise InvalidInput("All fields are required")

        try:
            numeric_rating = float(rating)
        except (TypeError, ValueError):
            raise InvalidInput("Rating must be a number")

        review = Review(
            id=str(uuid.uuid4()),
            donation_id=donation_id,
            reviewer_name=reviewer_name,
            description=description,
            rating=numeric_rating,
            created_at=datetime.now(timezone.utc),
        )
        await self.store.insert(self.COLLECTION, review.id, review.to_firestore())

        logger.info(f"Added review {review.id} for donation {donation_id}")
        return review

    async def list_by_donation(self, donation_id: str) -> list[Review]:
        """List reviews for a donation, oldest first."""
        docs = await self.store.find(
            self.COLLECTION, filters={"donation_id": donation_id}, order_by="created_at"
        )
        return [Review.from_firestore(doc["id"], doc) for doc in docs]
