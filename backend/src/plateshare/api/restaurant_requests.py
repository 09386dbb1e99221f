"""Restaurant role-upgrade request endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import Field

from plateshare.auth.capabilities import Caller
from plateshare.dependencies import RestaurantRequestServiceDep, authorize
from plateshare.models.base import ApiModel

router = APIRouter(prefix="/restaurant-requests")


class RestaurantRequestBody(ApiModel):
    """Application for the restaurant role."""

    restaurant_name: str = Field(..., min_length=1)
    about: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    opening_time: str = Field(..., min_length=1)
    closing_time: str = Field(..., min_length=1)
    food_type: str = Field(..., min_length=1)
    image_url: str | None = None
    restaurant_email: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_restaurant_request(
    body: RestaurantRequestBody,
    caller: Annotated[Caller, Depends(authorize("restaurant_requests.submit"))],
    service: RestaurantRequestServiceDep,
):
    """Apply for the restaurant role. One outstanding request per owner."""
    request = await service.submit(caller.email, body.model_dump())
    return {"message": "Restaurant request submitted successfully", "requestId": request.id}


@router.get("")
async def list_restaurant_requests(
    caller: Annotated[Caller, Depends(authorize("restaurant_requests.list_all"))],
    service: RestaurantRequestServiceDep,
):
    """List every restaurant request, newest first (admin only)."""
    return [request.to_api() for request in await service.list_all()]


@router.get("/status")
async def get_my_restaurant_request_status(
    caller: Annotated[Caller, Depends(authorize("restaurant_requests.status"))],
    service: RestaurantRequestServiceDep,
):
    """Status of the caller's outstanding restaurant request, or null."""
    current = await service.status_for(caller.email)
    return {"status": current.value if current else None}


@router.get("/owner/{email}")
async def get_restaurant_by_owner(
    email: str,
    caller: Annotated[Caller, Depends(authorize("restaurant_requests.get_by_owner"))],
    service: RestaurantRequestServiceDep,
):
    """Latest restaurant profile submitted by an owner."""
    request = await service.get_by_owner(email)
    return request.to_api()


@router.patch("/{request_id}")
async def approve_restaurant_request(
    request_id: str,
    caller: Annotated[Caller, Depends(authorize("restaurant_requests.decide"))],
    service: RestaurantRequestServiceDep,
):
    """Approve a request and grant the owner the restaurant role (admin only)."""
    request = await service.approve(request_id)
    return {
        "message": "Restaurant request approved and role updated",
        "request": request.to_api(),
    }


@router.delete("/{request_id}")
async def reject_restaurant_request(
    request_id: str,
    caller: Annotated[Caller, Depends(authorize("restaurant_requests.delete"))],
    service: RestaurantRequestServiceDep,
):
    """Reject a request by deleting it. The owner's role is left unchanged."""
    await service.delete(request_id)
    return {"message": "Restaurant request deleted successfully"}
