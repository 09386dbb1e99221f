"""Charity pickup request endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import Field

from plateshare.auth.capabilities import Caller
from plateshare.dependencies import PickupRequestServiceDep, authorize
from plateshare.models.base import ApiModel
from plateshare.models.pickup_request import PickupRequestStatus

router = APIRouter()


class CreatePickupRequest(ApiModel):
    """Charity claim on a donation. Status is always set to Pending."""

    donation_id: str = Field(..., min_length=1)
    charity_name: str | None = None
    description: str | None = Field(None, validation_alias="requestDescription")
    pickup_time: str | None = None


class StatusUpdate(ApiModel):
    """Restaurant decision on a request."""

    status: PickupRequestStatus


@router.post("/requests", status_code=status.HTTP_201_CREATED)
async def create_pickup_request(
    body: CreatePickupRequest,
    caller: Annotated[Caller, Depends(authorize("pickup_requests.create"))],
    service: PickupRequestServiceDep,
):
    """Request a Pending donation as the calling charity."""
    request = await service.create(
        charity_email=caller.email,
        donation_id=body.donation_id,
        charity_name=body.charity_name,
        description=body.description,
        pickup_time=body.pickup_time,
    )
    return {
        "message": "Donation request submitted successfully",
        "requestId": request.id,
        "request": request.to_api(),
    }


@router.get("/requests")
async def list_my_pickup_requests(
    caller: Annotated[Caller, Depends(authorize("pickup_requests.list_mine"))],
    service: PickupRequestServiceDep,
):
    """List the calling charity's requests, newest first."""
    return [request.to_api() for request in await service.list_by_charity(caller.email)]


@router.get("/restaurant/requests")
async def list_restaurant_pickup_requests(
    caller: Annotated[Caller, Depends(authorize("pickup_requests.list_for_restaurant"))],
    service: PickupRequestServiceDep,
):
    """List requests on the calling restaurant's donations."""
    return [request.to_api() for request in await service.list_by_restaurant(caller.email)]


@router.get("/requests/{request_id}")
async def get_pickup_request(
    request_id: str,
    caller: Annotated[Caller, Depends(authorize("pickup_requests.get"))],
    service: PickupRequestServiceDep,
):
    """Get a request; visible to its charity and its restaurant."""
    request = await service.get_for_party(request_id, caller.email)
    return request.to_api()


@router.delete("/requests/{request_id}")
async def cancel_pickup_request(
    request_id: str,
    caller: Annotated[Caller, Depends(authorize("pickup_requests.cancel"))],
    service: PickupRequestServiceDep,
):
    """Cancel the caller's own Pending request."""
    await service.cancel(request_id, caller.email)
    return {"message": "Request cancelled successfully", "deletedCount": 1}


@router.patch("/requests/{request_id}")
async def set_pickup_request_status(
    request_id: str,
    body: StatusUpdate,
    caller: Annotated[Caller, Depends(authorize("pickup_requests.set_status"))],
    service: PickupRequestServiceDep,
):
    """Accept or reject a Pending request on the caller's donation."""
    request = await service.set_status(request_id, caller.email, body.status)
    return {"message": "Request updated", "request": request.to_api()}


@router.patch("/requests/{request_id}/pickup")
async def confirm_pickup(
    request_id: str,
    caller: Annotated[Caller, Depends(authorize("pickup_requests.confirm_pickup"))],
    service: PickupRequestServiceDep,
):
    """Confirm pickup; marks both the donation and the request Picked Up."""
    request = await service.confirm_pickup(request_id, caller.email)
    return {"message": "Pickup confirmed successfully", "request": request.to_api()}
