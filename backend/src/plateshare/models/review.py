"""Donation review model."""

from datetime import datetime, timezone

from pydantic import Field

from plateshare.models.base import StoredModel


class Review(StoredModel):
    """Free-text review of a donation."""

    id: str
    donation_id: str
    reviewer_name: str
    description: str
    rating: float
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
