"""Abstract document store - the persistence seam for all services."""

import hashlib
from abc import ABC, abstractmethod

CLAIMS_COLLECTION = "outstanding_claims"


class DuplicateKeyError(Exception):
    """Raised when a uniqueness claim is already held."""

    def __init__(self, claim_key: str):
        super().__init__(f"Claim already held: {claim_key}")
        self.claim_key = claim_key


def claim_id(claim_key: str) -> str:
    """Stable document ID for a uniqueness claim key."""
    return hashlib.sha256(claim_key.encode("utf-8")).hexdigest()


class DocumentStore(ABC):
    """
    Abstract base class for document persistence.

    Services depend on this interface only. Every operation is a single-document
    read or write, except ``insert_with_claim`` which atomically writes a
    document together with a uniqueness claim.

    Filters are equality filters ``{field: value}``; a ``__in`` suffix on the
    field name (``{"status__in": [...]}``) means membership.
    """

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> dict | None:
        """
        Get a document by ID.

        Returns:
            Document dict including ``id``, or None if absent.
        """
        pass

    @abstractmethod
    async def find(
        self,
        collection: str,
        filters: dict | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict]:
        """
        Find documents matching filters.

        Args:
            collection: Collection name.
            filters: Equality / membership filters.
            order_by: Field to sort by (insertion order when omitted).
            descending: Sort direction for ``order_by``.
            limit: Maximum number of results.

        Returns:
            List of document dicts including ``id``.
        """
        pass

    async def find_one(self, collection: str, filters: dict) -> dict | None:
        """Return the first document matching filters, or None."""
        docs = await self.find(collection, filters=filters, limit=1)
        return docs[0] if docs else None

    @abstractmethod
    async def insert(self, collection: str, doc_id: str, data: dict) -> str:
        """Create a document with the given ID."""
        pass

    @abstractmethod
    async def insert_with_claim(
        self, collection: str, doc_id: str, data: dict, claim_key: str
    ) -> str:
        """
        Create a document and a uniqueness claim in one atomic write.

        Raises:
            DuplicateKeyError: If ``claim_key`` is already held; nothing is written.
        """
        pass

    @abstractmethod
    async def release_claim(self, claim_key: str) -> None:
        """Release a uniqueness claim. Releasing an absent claim is a no-op."""
        pass

    @abstractmethod
    async def update(self, collection: str, doc_id: str, patch: dict) -> bool:
        """
        Merge ``patch`` into an existing document.

        Returns:
            False if the document does not exist.
        """
        pass

    async def find_one_and_update(
        self, collection: str, doc_id: str, patch: dict
    ) -> dict | None:
        """Update a document and return its new state, or None if absent."""
        if not await self.update(collection, doc_id, patch):
            return None
        return await self.get(collection, doc_id)

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> bool:
        """
        Delete a document.

        Returns:
            False if the document did not exist.
        """
        pass
