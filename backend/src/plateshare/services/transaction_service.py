"""Payment transaction ledger."""

import logging
import uuid
from datetime import datetime, timezone

from plateshare.models.transaction import Transaction
from plateshare.providers.base import DocumentStore

logger = logging.getLogger(__name__)


class TransactionService:
    """Records payments confirmed by the client."""

    COLLECTION = "transactions"

    def __init__(self, store: DocumentStore):
        """Initialize TransactionService."""
        self.store = store

    async def record(
        self, email: str, transaction_id: str, amount: float, purpose: str | None = None
    ) -> Transaction:
        """Store a transaction for ``email``."""
        transaction = Transaction(
            id=str(uuid.uuid4()),
            transaction_id=transaction_id,
            email=email,
            amount=amount,
            purpose=purpose,
            created_at=datetime.now(timezone.utc),
        )
        await self.store.insert(self.COLLECTION, transaction.id, transaction.to_firestore())

        logger.info(f"Recorded transaction {transaction_id} ({purpose or 'unspecified'})")
        return transaction
