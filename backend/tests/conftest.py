"""Shared fixtures: in-memory store, fake token verification, HTTP client."""

import copy
import os

# Must be set before plateshare.middleware.rate_limit builds the limiter
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from firebase_admin import auth as firebase_auth
from httpx import ASGITransport, AsyncClient

from plateshare.dependencies import get_payment_client, get_store
from plateshare.main import create_app
from plateshare.models.user import UserRole
from plateshare.providers.base import DocumentStore, DuplicateKeyError
from plateshare.services.user_service import UserService


class InMemoryStore(DocumentStore):
    """Dict-backed DocumentStore with the same semantics as FirestoreStore."""

    def __init__(self):
        self.collections: dict[str, dict[str, dict]] = {}
        self.claims: dict[str, dict] = {}

    def _col(self, collection: str) -> dict[str, dict]:
        return self.collections.setdefault(collection, {})

    @staticmethod
    def _matches(data: dict, filters: dict | None) -> bool:
        for field, value in (filters or {}).items():
            if field.endswith("__in"):
                if data.get(field.removesuffix("__in")) not in value:
                    return False
            elif data.get(field) != value:
                return False
        return True

    async def get(self, collection, doc_id):
        data = self._col(collection).get(doc_id)
        if data is None:
            return None
        return {"id": doc_id, **copy.deepcopy(data)}

    async def find(self, collection, filters=None, order_by=None, descending=False, limit=None):
        docs = [
            {"id": doc_id, **copy.deepcopy(data)}
            for doc_id, data in self._col(collection).items()
            if self._matches(data, filters)
        ]
        if order_by:
            docs.sort(key=lambda doc: doc.get(order_by), reverse=descending)
        if limit:
            docs = docs[:limit]
        return docs

    async def insert(self, collection, doc_id, data):
        self._col(collection)[doc_id] = copy.deepcopy(data)
        return doc_id

    async def insert_with_claim(self, collection, doc_id, data, claim_key):
        if claim_key in self.claims:
            raise DuplicateKeyError(claim_key)
        self.claims[claim_key] = {"collection": collection, "doc_id": doc_id}
        self._col(collection)[doc_id] = copy.deepcopy(data)
        return doc_id

    async def release_claim(self, claim_key):
        self.claims.pop(claim_key, None)

    async def update(self, collection, doc_id, patch):
        docs = self._col(collection)
        if doc_id not in docs:
            return False
        docs[doc_id].update(copy.deepcopy(patch))
        return True

    async def delete(self, collection, doc_id):
        return self._col(collection).pop(doc_id, None) is not None


class FakePaymentClient:
    """Records payment intents instead of calling Stripe."""

    def __init__(self):
        self.intents: list[dict] = []
        self.error: Exception | None = None

    async def create_payment_intent(self, amount_cents, metadata):
        if self.error:
            raise self.error
        self.intents.append({"amount": amount_cents, "metadata": metadata})
        return f"pi_test{len(self.intents)}_secret_abc"


TOKEN_PREFIX = "token-"


def bearer(email: str) -> dict[str, str]:
    """Authorization header for a caller with ``email``."""
    return {"Authorization": f"Bearer {TOKEN_PREFIX}{email}"}


def _fake_verify_id_token(token: str) -> dict:
    if not token.startswith(TOKEN_PREFIX):
        raise ValueError("bad token")
    email = token.removeprefix(TOKEN_PREFIX)
    return {"uid": f"uid-{email}", "email": email}


@pytest.fixture(autouse=True)
def fake_firebase_auth(monkeypatch):
    """Accept tokens of the form ``token-<email>``."""
    monkeypatch.setattr(firebase_auth, "verify_id_token", _fake_verify_id_token)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def payment_client():
    return FakePaymentClient()


@pytest.fixture
def app(store, payment_client):
    """Create a fresh app wired to the in-memory store.

    Note: ASGITransport does not invoke the lifespan handler,
    so Firebase Admin SDK initialization is not triggered.
    """
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_payment_client] = lambda: payment_client
    return app


@pytest.fixture
async def client(app):
    """Create an async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def seed_user(store):
    """Register a user directly in the store and give it a role."""

    async def _seed(email: str, role: UserRole = UserRole.USER, name: str | None = None):
        user_service = UserService(store)
        user = await user_service.register(name=name or email.split("@")[0], email=email)
        if role != UserRole.USER:
            user = await user_service.set_role(user.id, role)
        return user

    return _seed
