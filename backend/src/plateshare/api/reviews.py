"""Review endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from plateshare.auth.capabilities import Caller
from plateshare.dependencies import ReviewServiceDep, authorize
from plateshare.middleware.rate_limit import write_limit
from plateshare.models.base import ApiModel

router = APIRouter()


class CreateReviewRequest(ApiModel):
    """Review of a donation. Presence of every field is checked by the service."""

    donation_id: str | None = None
    reviewer_name: str | None = None
    description: str | None = None
    rating: float | str | None = None


@router.post("/reviews", status_code=status.HTTP_201_CREATED)
@write_limit
async def add_review(
    request: Request,
    body: CreateReviewRequest,
    caller: Annotated[Caller, Depends(authorize("reviews.create"))],
    review_service: ReviewServiceDep,
):
    """Add a review to a donation (no authentication)."""
    review = await review_service.add(
        donation_id=body.donation_id,
        reviewer_name=body.reviewer_name,
        description=body.description,
        rating=body.rating,
    )
    return {"insertedId": review.id, **review.to_api()}
