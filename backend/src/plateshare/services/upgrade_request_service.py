"""Role-upgrade request services (charity and restaurant tracks)."""

import logging
import uuid
from datetime import datetime, timezone

from plateshare.auth.capabilities import check_owner
from plateshare.errors import Conflict, InvalidInput, InvalidTransition, NotFound
from plateshare.models.upgrade_request import (
    OUTSTANDING_STATUSES,
    CharityRequest,
    RestaurantRequest,
    UpgradeRequestStatus,
)
from plateshare.models.user import UserRole
from plateshare.providers.base import DocumentStore, DuplicateKeyError
from plateshare.services.user_service import UserService

logger = logging.getLogger(__name__)


class UpgradeRequestService:
    """
    Applications for an elevated role, decided by an admin.

    At most one outstanding (Pending or Approved) request per applicant email
    exists on a track. The store holds a claim document for every outstanding
    request, written atomically with it, so concurrent submissions cannot both
    succeed. The claim is released when the request is rejected, withdrawn or
    deleted.

    Subclasses set the collection, model, applicant field and granted role.
    """

    COLLECTION: str
    TRACK: str
    MODEL: type[CharityRequest] | type[RestaurantRequest]
    APPLICANT_FIELD: str
    GRANTED_ROLE: UserRole

    def __init__(self, store: DocumentStore, user_service: UserService):
        """
        Initialize the service.

        Args:
            store: Document store instance.
            user_service: Applies the granted role on approval.
        """
        self.store = store
        self.user_service = user_service

    def _claim_key(self, email: str) -> str:
        return f"{self.TRACK}-request:{email.lower()}"

    def _from_doc(self, doc: dict):
        return self.MODEL.from_firestore(doc["id"], doc)

    async def submit(self, applicant_email: str, fields: dict):
        """
        Submit a Pending request for ``applicant_email``.

        Raises:
            Conflict: If the applicant already has an outstanding request.
        """
        request = self.MODEL.model_validate(
            {
                **fields,
                "id": str(uuid.uuid4()),
                "status": UpgradeRequestStatus.PENDING,
                "created_at": datetime.now(timezone.utc),
                self.APPLICANT_FIELD: applicant_email.lower(),
            }
        )

        try:
            await self.store.insert_with_claim(
                self.COLLECTION,
                request.id,
                request.to_firestore(),
                self._claim_key(applicant_email),
            )
        except DuplicateKeyError:
            raise Conflict("You already have a pending or approved request")

        logger.info(f"{self.TRACK} request {request.id} submitted by {applicant_email}")
        return request

    async def status_for(self, applicant_email: str) -> UpgradeRequestStatus | None:
        """Status of the applicant's outstanding request, or None."""
        doc = await self.store.find_one(
            self.COLLECTION,
            {
                self.APPLICANT_FIELD: applicant_email.lower(),
                "status__in": [status.value for status in OUTSTANDING_STATUSES],
            },
        )
        if not doc:
            return None
        return UpgradeRequestStatus(doc["status"])

    async def get(self, request_id: str):
        """Get a request by ID."""
        data = await self.store.get(self.COLLECTION, request_id)
        if not data:
            return None
        return self.MODEL.from_firestore(request_id, data)

    async def require(self, request_id: str):
        """Get a request or raise NotFound."""
        request = await self.get(request_id)
        if not request:
            raise NotFound("Request not found")
        return request

    async def list_all(self) -> list:
        """List every request, newest first."""
        docs = await self.store.find(self.COLLECTION, order_by="created_at", descending=True)
        return [self._from_doc(doc) for doc in docs]

    async def list_by_applicant(self, applicant_email: str) -> list:
        """List one applicant's requests, newest first."""
        docs = await self.store.find(
            self.COLLECTION,
            filters={self.APPLICANT_FIELD: applicant_email.lower()},
            order_by="created_at",
            descending=True,
        )
        return [self._from_doc(doc) for doc in docs]

    async def decide(self, request_id: str, status: UpgradeRequestStatus):
        """
        Approve or reject a Pending request.

        Approval grants the track's role to the applicant's user record.
        Approving an already Approved request re-applies the role.

        Raises:
            InvalidInput: If ``status`` is not Approved or Rejected.
            NotFound: If the request does not exist.
            InvalidTransition: If the request was already decided otherwise.
        """
        if status not in (UpgradeRequestStatus.APPROVED, UpgradeRequestStatus.REJECTED):
            raise InvalidInput("Invalid status")

        request = await self.require(request_id)
        repeat_approval = (
            request.status == UpgradeRequestStatus.APPROVED
            and status == UpgradeRequestStatus.APPROVED
        )
        if request.status != UpgradeRequestStatus.PENDING and not repeat_approval:
            raise InvalidTransition(f"Request is already {request.status.value}")

        await self.store.update(self.COLLECTION, request_id, {"status": status.value})
        request.status = status

        if status == UpgradeRequestStatus.APPROVED:
            granted = await self.user_service.set_role_by_email(
                request.applicant_email, self.GRANTED_ROLE
            )
            if not granted:
                logger.warning(
                    f"Approved {self.TRACK} request {request_id} but no user is registered "
                    f"as {request.applicant_email}"
                )
        else:
            await self.store.release_claim(self._claim_key(request.applicant_email))

        logger.info(f"{self.TRACK} request {request_id} {status.value}")
        return request


class CharityRequestService(UpgradeRequestService):
    """Charity role applications (``role_requests`` collection)."""

    COLLECTION = "role_requests"
    TRACK = "charity"
    MODEL = CharityRequest
    APPLICANT_FIELD = "email"
    GRANTED_ROLE = UserRole.CHARITY

    async def withdraw(self, request_id: str, caller_email: str) -> None:
        """
        Delete a Pending request submitted by the caller.

        Raises:
            NotFound: If the request does not exist.
            Forbidden: If the caller did not submit it.
            InvalidTransition: If it is no longer Pending.
        """
        request = await self.require(request_id)
        check_owner("charity_requests.withdraw", caller_email, request)

        if request.status != UpgradeRequestStatus.PENDING:
            raise InvalidTransition("Only pending requests can be deleted")

        await self.store.delete(self.COLLECTION, request_id)
        await self.store.release_claim(self._claim_key(request.applicant_email))
        logger.info(f"charity request {request_id} withdrawn")


class RestaurantRequestService(UpgradeRequestService):
    """Restaurant role applications."""

    COLLECTION = "restaurant_requests"
    TRACK = "restaurant"
    MODEL = RestaurantRequest
    APPLICANT_FIELD = "owner_email"
    GRANTED_ROLE = UserRole.RESTAURANT

    async def approve(self, request_id: str) -> RestaurantRequest:
        """Approve and grant the restaurant role."""
        return await self.decide(request_id, UpgradeRequestStatus.APPROVED)

    async def delete(self, request_id: str) -> None:
        """
        Reject by deleting the request. The applicant's role is never changed.

        Raises:
            NotFound: If the request does not exist.
        """
        request = await self.require(request_id)

        await self.store.delete(self.COLLECTION, request_id)
        await self.store.release_claim(self._claim_key(request.applicant_email))
        logger.info(f"restaurant request {request_id} deleted; role of {request.owner_email} unchanged")

    async def get_by_owner(self, owner_email: str) -> RestaurantRequest:
        """
        Latest restaurant profile submitted by ``owner_email``.

        Raises:
            NotFound: If the owner never submitted one.
        """
        requests = await self.list_by_applicant(owner_email)
        if not requests:
            raise NotFound("Restaurant not found")
        return requests[0]
