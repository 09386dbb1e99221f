"""Dependency injection for FastAPI."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials

from plateshare.auth import _security, get_current_identity
from plateshare.auth.capabilities import Caller, get_capability
from plateshare.config import Settings, get_settings
from plateshare.errors import Forbidden
from plateshare.providers.base import DocumentStore
from plateshare.providers.firestore_client import FirestoreStore
from plateshare.providers.payment_client import PaymentClient
from plateshare.services.donation_service import DonationService
from plateshare.services.pickup_request_service import PickupRequestService
from plateshare.services.review_service import ReviewService
from plateshare.services.transaction_service import TransactionService
from plateshare.services.upgrade_request_service import (
    CharityRequestService,
    RestaurantRequestService,
)
from plateshare.services.user_service import UserService


@lru_cache
def get_store() -> DocumentStore:
    """Get the shared document store, created on first use."""
    settings = get_settings()
    return FirestoreStore(
        project_id=settings.gcp_project_id,
        database=settings.firestore_database,
        use_emulator=settings.use_firebase_emulator,
        emulator_host=settings.firestore_emulator_host,
    )


@lru_cache
def get_payment_client() -> PaymentClient:
    """Get cached payment client."""
    settings = get_settings()
    return PaymentClient(secret_key=settings.stripe_secret_key, currency=settings.payment_currency)


StoreDep = Annotated[DocumentStore, Depends(get_store)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_user_service(store: StoreDep, settings: SettingsDep) -> UserService:
    """Get UserService instance."""
    return UserService(store=store, initial_admins=settings.initial_admin_emails)


def get_review_service(store: StoreDep) -> ReviewService:
    """Get ReviewService instance."""
    return ReviewService(store=store)


def get_donation_service(
    store: StoreDep,
    review_service: Annotated[ReviewService, Depends(get_review_service)],
) -> DonationService:
    """Get DonationService instance."""
    return DonationService(store=store, review_service=review_service)


def get_pickup_request_service(
    store: StoreDep,
    donation_service: Annotated[DonationService, Depends(get_donation_service)],
) -> PickupRequestService:
    """Get PickupRequestService instance."""
    return PickupRequestService(store=store, donation_service=donation_service)


def get_charity_request_service(
    store: StoreDep,
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> CharityRequestService:
    """Get CharityRequestService instance."""
    return CharityRequestService(store=store, user_service=user_service)


def get_restaurant_request_service(
    store: StoreDep,
    user_service: Annotated[UserService, Depends(get_user_service)],
) -> RestaurantRequestService:
    """Get RestaurantRequestService instance."""
    return RestaurantRequestService(store=store, user_service=user_service)


def get_transaction_service(store: StoreDep) -> TransactionService:
    """Get TransactionService instance."""
    return TransactionService(store=store)


# Type aliases for dependency injection
PaymentClientDep = Annotated[PaymentClient, Depends(get_payment_client)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
DonationServiceDep = Annotated[DonationService, Depends(get_donation_service)]
PickupRequestServiceDep = Annotated[PickupRequestService, Depends(get_pickup_request_service)]
CharityRequestServiceDep = Annotated[CharityRequestService, Depends(get_charity_request_service)]
RestaurantRequestServiceDep = Annotated[
    RestaurantRequestService, Depends(get_restaurant_request_service)
]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]


def authorize(action: str):
    """
    Build the authorization dependency for an action.

    The action's capability decides whether a credential is needed and which
    stored roles are accepted. Ownership is checked later by the service,
    once the target record is loaded.

    Usage:
        @router.get("/users")
        async def list_users(caller: Annotated[Caller, Depends(authorize("users.list"))]):
            ...
    """
    capability = get_capability(action)

    async def dependency(
        user_service: UserServiceDep,
        credentials: HTTPAuthorizationCredentials | None = Security(_security),
    ) -> Caller:
        if capability.is_public:
            return Caller()

        identity = await get_current_identity(credentials)
        if not capability.requires_role:
            return Caller(email=identity.email)

        user = await user_service.get_by_email(identity.email)
        if not user or not capability.permits(user.role):
            raise Forbidden("forbidden access")
        return Caller(email=identity.email, user=user)

    return dependency
