"""User registration and role management service."""

import logging
import uuid
from datetime import datetime, timezone

from plateshare.auth.capabilities import check_owner
from plateshare.errors import Conflict, InvalidInput, NotFound
from plateshare.models.user import User, UserRole
from plateshare.providers.base import DocumentStore, DuplicateKeyError

logger = logging.getLogger(__name__)


class UserService:
    """Service for managing users and their roles."""

    COLLECTION = "users"

    def __init__(self, store: DocumentStore, initial_admins: list[str] | None = None):
        """
        Initialize UserService.

        Args:
            store: Document store instance
            initial_admins: Emails registered directly as admin
        """
        self.store = store
        self.initial_admins = [email.lower() for email in initial_admins or []]

    @staticmethod
    def _email_claim(email: str) -> str:
        return f"user-email:{email.lower()}"

    async def register(self, name: str, email: str, profile_link: str | None = None) -> User:
        """
        Register a new user with role ``user``.

        Args:
            name: Display name
            email: User email address (unique, stored lowercase)
            profile_link: Optional profile URL

        Returns:
            Created User

        Raises:
            InvalidInput: If name or email is missing
            Conflict: If the email is already registered
        """
        if not name or not email:
            raise InvalidInput("Name and Email are required")

        email = email.lower()
        is_initial_admin = email in self.initial_admins
        user = User(
            id=str(uuid.uuid4()),
            email=email,
            name=name,
            profile_link=profile_link or None,
            role=UserRole.ADMIN if is_initial_admin else UserRole.USER,
            created_at=datetime.now(timezone.utc),
        )

        try:
            await self.store.insert_with_claim(
                self.COLLECTION, user.id, user.to_firestore(), self._email_claim(email)
            )
        except DuplicateKeyError:
            raise Conflict("User already exists")

        logger.info(f"Registered user {user.id} with role {user.role.value}")
        return user

    async def get_by_id(self, user_id: str) -> User | None:
        """Get user by document ID."""
        data = await self.store.get(self.COLLECTION, user_id)
        if not data:
            return None
        return User.from_firestore(user_id, data)

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        data = await self.store.find_one(self.COLLECTION, {"email": email.lower()})
        if not data:
            return None
        return User.from_firestore(data["id"], data)

    async def get_profile(self, email: str, caller_email: str) -> User:
        """
        Get a user's own profile.

        Raises:
            Forbidden: If the caller is not the subject
            NotFound: If no user has this email
        """
        email = email.lower()
        check_owner("users.get_self", caller_email, User.model_construct(email=email))

        user = await self.get_by_email(email)
        if not user:
            raise NotFound("User not found")
        return user

    async def list_users(self, role: UserRole | None = None) -> list[User]:
        """List users, optionally restricted to one role."""
        filters = {"role": role.value} if role else None
        docs = await self.store.find(self.COLLECTION, filters=filters, order_by="created_at")
        return [User.from_firestore(doc["id"], doc) for doc in docs]

    async def search(self, query: str) -> list[User]:
        """
        Case-insensitive substring search over email or name.

        Firestore has no substring queries, so matching happens here.
        """
        if not query:
            return []

        needle = query.lower()
        return [
            user
            for user in await self.list_users()
            if needle in user.email.lower() or needle in user.name.lower()
        ]

    async def set_role(self, user_id: str, role: UserRole) -> User:
        """
        Directly override a user's role (admin action, no approval workflow).

        Raises:
            NotFound: If the user does not exist
        """
        data = await self.store.find_one_and_update(self.COLLECTION, user_id, {"role": role.value})
        if not data:
            raise NotFound("User not found")

        logger.info(f"Set role of user {user_id} to {role.value}")
        return User.from_firestore(user_id, data)

    async def set_role_by_email(self, email: str, role: UserRole) -> bool:
        """
        Set the role of the user registered with ``email``.

        Returns:
            False if no user has this email
        """
        user = await self.get_by_email(email)
        if not user:
            return False

        await self.store.update(self.COLLECTION, user.id, {"role": role.value})
        logger.info(f"Set role of user {user.id} to {role.value}")
        return True
