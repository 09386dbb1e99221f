"""Charity role-upgrade request endpoints.

``/charity-requests`` is an older alias for the status and submit routes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import Field

from plateshare.auth.capabilities import Caller
from plateshare.dependencies import CharityRequestServiceDep, authorize
from plateshare.models.base import ApiModel
from plateshare.models.upgrade_request import UpgradeRequestStatus

router = APIRouter()


class CharityRequestBody(ApiModel):
    """Application for the charity role."""

    name: str = Field(..., min_length=1)
    organization: str = Field(..., min_length=1)
    mission: str = Field(..., min_length=1)
    amount: float | None = None
    transaction_id: str | None = None


class DecisionBody(ApiModel):
    """Admin decision on a request."""

    status: UpgradeRequestStatus


@router.get("/role-requests/status")
@router.get("/charity-requests/status")
async def get_my_request_status(
    caller: Annotated[Caller, Depends(authorize("charity_requests.status"))],
    service: CharityRequestServiceDep,
):
    """Status of the caller's outstanding charity request, or null."""
    current = await service.status_for(caller.email)
    return {"status": current.value if current else None}


@router.post("/role-requests")
@router.post("/charity-requests")
async def submit_charity_request(
    body: CharityRequestBody,
    caller: Annotated[Caller, Depends(authorize("charity_requests.submit"))],
    service: CharityRequestServiceDep,
):
    """Apply for the charity role. One outstanding request per user."""
    request = await service.submit(caller.email, body.model_dump())
    return {"insertedId": request.id}


@router.get("/role-requests")
async def list_charity_requests(
    caller: Annotated[Caller, Depends(authorize("charity_requests.list_all"))],
    service: CharityRequestServiceDep,
):
    """List every charity request, newest first (admin only)."""
    return [request.to_api() for request in await service.list_all()]


@router.get("/role-requests/my-requests")
async def list_my_charity_requests(
    caller: Annotated[Caller, Depends(authorize("charity_requests.list_mine"))],
    service: CharityRequestServiceDep,
):
    """List the caller's own charity requests, newest first."""
    return [request.to_api() for request in await service.list_by_applicant(caller.email)]


@router.delete("/role-requests/{request_id}")
async def withdraw_charity_request(
    request_id: str,
    caller: Annotated[Caller, Depends(authorize("charity_requests.withdraw"))],
    service: CharityRequestServiceDep,
):
    """Withdraw the caller's own Pending request."""
    await service.withdraw(request_id, caller.email)
    return {"message": "Request deleted successfully", "deletedCount": 1}


@router.patch("/role-requests/{request_id}")
async def decide_charity_request(
    request_id: str,
    body: DecisionBody,
    caller: Annotated[Caller, Depends(authorize("charity_requests.decide"))],
    service: CharityRequestServiceDep,
):
    """Approve (grants the charity role) or reject a request (admin only)."""
    request = await service.decide(request_id, body.status)
    return {"message": f"Request {request.status.value}", "request": request.to_api()}
