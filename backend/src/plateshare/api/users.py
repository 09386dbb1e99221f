"""User registration and role management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import EmailStr, Field

from plateshare.auth.capabilities import Caller
from plateshare.dependencies import UserServiceDep, authorize
from plateshare.errors import NotFound
from plateshare.middleware.rate_limit import write_limit
from plateshare.models.base import ApiModel
from plateshare.models.user import UserRole

router = APIRouter()


class RegisterRequest(ApiModel):
    """User registration request."""

    name: str = Field(..., min_length=1)
    email: EmailStr
    profile_link: str | None = None


class SetRoleRequest(ApiModel):
    """Direct role override by an admin."""

    role: UserRole


@router.post("/users", status_code=status.HTTP_201_CREATED)
@write_limit
async def register_user(
    request: Request,
    body: RegisterRequest,
    caller: Annotated[Caller, Depends(authorize("users.register"))],
    user_service: UserServiceDep,
):
    """Register a new user with the default ``user`` role."""
    user = await user_service.register(
        name=body.name, email=body.email, profile_link=body.profile_link
    )
    return {"message": "User registered successfully", "userId": user.id}


@router.get("/users")
async def list_users(
    caller: Annotated[Caller, Depends(authorize("users.list"))],
    user_service: UserServiceDep,
):
    """List all users (admin, charity or restaurant)."""
    return [user.to_api() for user in await user_service.list_users()]


# Fixed paths must be declared before /users/{email}
@router.get("/users/charities")
async def list_charities(
    caller: Annotated[Caller, Depends(authorize("users.list_charities"))],
    user_service: UserServiceDep,
):
    """List users holding the charity role."""
    return [user.to_api() for user in await user_service.list_users(role=UserRole.CHARITY)]


@router.get("/users/search")
async def search_users(
    caller: Annotated[Caller, Depends(authorize("users.search"))],
    user_service: UserServiceDep,
    q: str = Query("", description="Substring of email or name (case-insensitive)"),
):
    """Search users by email or name (admin only)."""
    return [user.to_api() for user in await user_service.search(q)]


@router.get("/users/{email}")
async def get_own_profile(
    email: str,
    caller: Annotated[Caller, Depends(authorize("users.get_self"))],
    user_service: UserServiceDep,
):
    """Get the caller's own user record."""
    user = await user_service.get_profile(email, caller_email=caller.email)
    return user.to_api()


@router.get("/users/{user_id}/role")
async def get_user_by_id(
    user_id: str,
    caller: Annotated[Caller, Depends(authorize("users.get_by_id"))],
    user_service: UserServiceDep,
):
    """Get a user record by ID."""
    user = await user_service.get_by_id(user_id)
    if not user:
        raise NotFound("User not found")
    return user.to_api()


@router.patch("/users/{user_id}/role")
async def set_user_role(
    user_id: str,
    body: SetRoleRequest,
    caller: Annotated[Caller, Depends(authorize("users.set_role"))],
    user_service: UserServiceDep,
):
    """Set a user's role directly (admin only, no payment or approval)."""
    user = await user_service.set_role(user_id, body.role)
    return {"message": f"Role updated to {user.role.value}", "user": user.to_api()}
