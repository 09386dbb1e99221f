"""Firestore implementation of the document store."""

import logging
import os
from datetime import datetime, timezone

from google.api_core.exceptions import AlreadyExists, NotFound
from google.cloud import firestore

from plateshare.providers.base import (
    CLAIMS_COLLECTION,
    DocumentStore,
    DuplicateKeyError,
    claim_id,
)

logger = logging.getLogger(__name__)


class FirestoreStore(DocumentStore):
    """
    Document store backed by Firestore.

    Handles connection management and emulator support. One instance is
    created at startup and shared by every service.
    """

    def __init__(
        self,
        project_id: str,
        database: str = "(default)",
        use_emulator: bool = False,
        emulator_host: str = "localhost:8080",
    ):
        """
        Initialize Firestore client.

        Args:
            project_id: GCP project ID.
            database: Firestore database ID.
            use_emulator: Whether to use Firebase Emulator.
            emulator_host: Emulator host:port.
        """
        self.project_id = project_id
        self.use_emulator = use_emulator

        if use_emulator:
            os.environ["FIRESTORE_EMULATOR_HOST"] = emulator_host

        self._client = firestore.Client(project=project_id or None, database=database)

    @property
    def client(self) -> firestore.Client:
        """Get the Firestore client instance."""
        return self._client

    def _collection(self, collection: str):
        return self._client.collection(collection)

    async def get(self, collection: str, doc_id: str) -> dict | None:
        doc = self._collection(collection).document(doc_id).get()
        if doc.exists:
            return {"id": doc.id, **doc.to_dict()}
        return None

    async def find(
        self,
        collection: str,
        filters: dict | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict]:
        query = self._collection(collection)

        if filters:
            for field, value in filters.items():
                # Support __in suffix for "in" queries (e.g., "status__in")
                if field.endswith("__in"):
                    query = query.where(field.removesuffix("__in"), "in", list(value))
                else:
                    query = query.where(field, "==", value)

        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)

        if limit:
            query = query.limit(limit)

        return [{"id": doc.id, **doc.to_dict()} for doc in query.stream()]

    async def insert(self, collection: str, doc_id: str, data: dict) -> str:
        self._collection(collection).document(doc_id).set(data)
        return doc_id

    async def insert_with_claim(
        self, collection: str, doc_id: str, data: dict, claim_key: str
    ) -> str:
        claim_ref = self._collection(CLAIMS_COLLECTION).document(claim_id(claim_key))
        doc_ref = self._collection(collection).document(doc_id)

        # create() carries an exists=false precondition, failing the whole batch
        batch = self._client.batch()
        batch.create(
            claim_ref,
            {
                "key": claim_key,
                "collection": collection,
                "doc_id": doc_id,
                "created_at": datetime.now(timezone.utc).isoformat(),
            },
        )
        batch.set(doc_ref, data)

        try:
            batch.commit()
        except AlreadyExists as e:
            raise DuplicateKeyError(claim_key) from e

        return doc_id

    async def release_claim(self, claim_key: str) -> None:
        self._collection(CLAIMS_COLLECTION).document(claim_id(claim_key)).delete()

    async def update(self, collection: str, doc_id: str, patch: dict) -> bool:
        try:
            self._collection(collection).document(doc_id).update(patch)
        except NotFound:
            return False
        return True

    async def delete(self, collection: str, doc_id: str) -> bool:
        doc_ref = self._collection(collection).document(doc_id)
        if not doc_ref.get().exists:
            return False
        doc_ref.delete()
        return True
