"""Donation listing endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import Field

from plateshare.auth.capabilities import Caller
from plateshare.dependencies import DonationServiceDep, authorize
from plateshare.models.base import ApiModel

router = APIRouter(prefix="/donations")


class CreateDonationRequest(ApiModel):
    """New donation posted by a restaurant. The owner is the caller."""

    title: str = Field(..., min_length=1)
    food_type: str = Field(..., min_length=1)
    quantity: int | str
    pickup_time: str = Field(..., min_length=1)
    restaurant_name: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    image_url: str | None = None


class UpdateDonationRequest(ApiModel):
    """Partial donation update. Status and owner are not editable."""

    title: str | None = Field(None, min_length=1)
    food_type: str | None = Field(None, min_length=1)
    quantity: int | str | None = None
    pickup_time: str | None = Field(None, min_length=1)
    restaurant_name: str | None = Field(None, min_length=1)
    location: str | None = Field(None, min_length=1)
    image_url: str | None = None


@router.get("")
async def list_public_donations(
    caller: Annotated[Caller, Depends(authorize("donations.list_public"))],
    donation_service: DonationServiceDep,
):
    """List all donations (no authentication, used by the home page)."""
    return [donation.to_api() for donation in await donation_service.list_all()]


@router.get("/admin")
async def list_donations_for_admin(
    caller: Annotated[Caller, Depends(authorize("donations.list_admin"))],
    donation_service: DonationServiceDep,
):
    """List all donations (admin only)."""
    return [donation.to_api() for donation in await donation_service.list_all()]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_donation(
    body: CreateDonationRequest,
    caller: Annotated[Caller, Depends(authorize("donations.create"))],
    donation_service: DonationServiceDep,
):
    """Post a donation as the calling restaurant."""
    donation = await donation_service.create(restaurant_email=caller.email, **body.model_dump())
    return {
        "message": "Donation added successfully",
        "donationId": donation.id,
        "donation": donation.to_api(),
    }


@router.get("/restaurant/{email}")
async def list_restaurant_donations(
    email: str,
    caller: Annotated[Caller, Depends(authorize("donations.list_by_restaurant"))],
    donation_service: DonationServiceDep,
):
    """List donations posted by a restaurant."""
    return [donation.to_api() for donation in await donation_service.list_by_restaurant(email)]


@router.put("/{donation_id}")
async def update_donation(
    donation_id: str,
    body: UpdateDonationRequest,
    caller: Annotated[Caller, Depends(authorize("donations.update"))],
    donation_service: DonationServiceDep,
):
    """Update fields of the caller's own donation."""
    donation = await donation_service.update(
        donation_id, caller.email, body.model_dump(exclude_unset=True)
    )
    return {"message": "Donation updated successfully", "donation": donation.to_api()}


@router.delete("/{donation_id}")
async def delete_donation(
    donation_id: str,
    caller: Annotated[Caller, Depends(authorize("donations.delete"))],
    donation_service: DonationServiceDep,
):
    """Delete the caller's own donation."""
    await donation_service.delete(donation_id, caller.email)
    return {"message": "Donation deleted successfully"}


@router.get("/{donation_id}")
async def get_donation(
    donation_id: str,
    caller: Annotated[Caller, Depends(authorize("donations.get"))],
    donation_service: DonationServiceDep,
):
    """Get a donation with its reviews."""
    donation, reviews = await donation_service.get_with_reviews(donation_id)
    return {
        "donation": donation.to_api(),
        "reviews": [review.to_api() for review in reviews],
    }
