"""Declarative capability table: who may perform each action."""

from dataclasses import dataclass
from enum import Enum

from plateshare.errors import Forbidden
from plateshare.models.user import User, UserRole


class Access(str, Enum):
    """Access requirement for an action."""

    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    USER = "user"
    CHARITY = "charity"
    RESTAURANT = "restaurant"
    ADMIN = "admin"


ROLE_ACCESS: dict[UserRole, Access] = {
    UserRole.USER: Access.USER,
    UserRole.CHARITY: Access.CHARITY,
    UserRole.RESTAURANT: Access.RESTAURANT,
    UserRole.ADMIN: Access.ADMIN,
}


@dataclass(frozen=True)
class Capability:
    """
    Requirement for one action.

    ``access`` is a set of alternatives: any one of them suffices. Roles are
    independent predicates; ADMIN does not imply CHARITY or RESTAURANT.
    ``owner_fields`` names record fields of which at least one must equal the
    caller's email.
    """

    access: frozenset[Access]
    owner_fields: tuple[str, ...] = ()

    @property
    def is_public(self) -> bool:
        return Access.PUBLIC in self.access

    @property
    def requires_role(self) -> bool:
        return not (self.access & {Access.PUBLIC, Access.AUTHENTICATED})

    def permits(self, role: UserRole | None) -> bool:
        """Check whether a stored role satisfies this capability."""
        if not self.requires_role:
            return True
        return role is not None and ROLE_ACCESS[role] in self.access


def _cap(*access: Access, owner: tuple[str, ...] = ()) -> Capability:
    return Capability(access=frozenset(access), owner_fields=owner)


PUBLIC = _cap(Access.PUBLIC)
AUTHENTICATED = _cap(Access.AUTHENTICATED)
ADMIN = _cap(Access.ADMIN)
CHARITY = _cap(Access.CHARITY)
RESTAURANT = _cap(Access.RESTAURANT)

CAPABILITIES: dict[str, Capability] = {
    # Users
    "users.register": PUBLIC,
    "users.list": _cap(Access.ADMIN, Access.CHARITY, Access.RESTAURANT),
    "users.list_charities": AUTHENTICATED,
    "users.search": ADMIN,
    "users.get_self": _cap(Access.AUTHENTICATED, owner=("email",)),
    "users.get_by_id": PUBLIC,
    "users.set_role": ADMIN,
    # Payments
    "payments.create_intent": AUTHENTICATED,
    "transactions.record": AUTHENTICATED,
    # Charity role-upgrade track
    "charity_requests.status": AUTHENTICATED,
    "charity_requests.submit": AUTHENTICATED,
    "charity_requests.list_all": ADMIN,
    "charity_requests.list_mine": CHARITY,
    "charity_requests.withdraw": _cap(Access.AUTHENTICATED, owner=("email",)),
    "charity_requests.decide": ADMIN,
    # Restaurant role-upgrade track
    "restaurant_requests.status": AUTHENTICATED,
    "restaurant_requests.submit": AUTHENTICATED,
    "restaurant_requests.list_all": ADMIN,
    "restaurant_requests.decide": ADMIN,
    "restaurant_requests.delete": ADMIN,
    "restaurant_requests.get_by_owner": AUTHENTICATED,
    # Donations
    "donations.list_public": PUBLIC,
    "donations.list_admin": ADMIN,
    "donations.create": RESTAURANT,
    "donations.list_by_restaurant": AUTHENTICATED,
    "donations.update": _cap(Access.AUTHENTICATED, owner=("restaurant_email",)),
    "donations.delete": _cap(Access.AUTHENTICATED, owner=("restaurant_email",)),
    "donations.get": PUBLIC,
    # Reviews
    "reviews.create": PUBLIC,
    # Pickup requests
    "pickup_requests.create": CHARITY,
    "pickup_requests.list_mine": CHARITY,
    "pickup_requests.list_for_restaurant": RESTAURANT,
    "pickup_requests.get": _cap(
        Access.AUTHENTICATED, owner=("charity_email", "restaurant_email")
    ),
    "pickup_requests.cancel": _cap(Access.CHARITY, owner=("charity_email",)),
    "pickup_requests.set_status": _cap(Access.RESTAURANT, owner=("restaurant_email",)),
    "pickup_requests.confirm_pickup": _cap(Access.CHARITY, owner=("charity_email",)),
}


@dataclass
class Caller:
    """Caller resolved by the authorization dependency."""

    email: str | None = None
    user: User | None = None


def get_capability(action: str) -> Capability:
    """Look up an action; unknown actions are a programming error."""
    try:
        return CAPABILITIES[action]
    except KeyError:
        raise KeyError(f"No capability registered for action '{action}'") from None


def check_owner(action: str, caller_email: str | None, record) -> None:
    """
    Enforce the ownership part of an action's capability.

    Raises:
        Forbidden: If none of the capability's owner fields match the caller.
    """
    capability = get_capability(action)
    if not capability.owner_fields:
        return
    if caller_email is None or not any(
        getattr(record, field, None) == caller_email for field in capability.owner_fields
    ):
        raise Forbidden("Forbidden")
