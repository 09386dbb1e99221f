"""Payment transaction record."""

from datetime import datetime, timezone

from pydantic import Field

from plateshare.models.base import StoredModel


class Transaction(StoredModel):
    """Completed payment recorded by the client after confirmation."""

    id: str
    transaction_id: str
    email: str
    amount: float
    purpose: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
