"""Provider implementations for PlateShare."""

from plateshare.providers.base import DocumentStore, DuplicateKeyError
from plateshare.providers.firestore_client import FirestoreStore
from plateshare.providers.payment_client import PaymentClient

__all__ = [
    "DocumentStore",
    "DuplicateKeyError",
    "FirestoreStore",
    "PaymentClient",
]
