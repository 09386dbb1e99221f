"""Payment intent and transaction endpoints."""

import logging
from typing import Annotated

import stripe
from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import Field

from plateshare.auth.capabilities import Caller
from plateshare.dependencies import PaymentClientDep, TransactionServiceDep, authorize
from plateshare.middleware.rate_limit import write_limit
from plateshare.models.base import ApiModel

logger = logging.getLogger(__name__)

router = APIRouter()


class PaymentIntentRequest(ApiModel):
    """Request body for creating a payment intent."""

    amount: int = Field(..., gt=0, description="Amount in cents")
    purpose: str = Field("charity-role", description="What the payment is for")


class TransactionRequest(ApiModel):
    """Payment confirmed by the client."""

    transaction_id: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    purpose: str | None = None


@router.post("/create-payment-intent")
@write_limit
async def create_payment_intent(
    request: Request,
    body: PaymentIntentRequest,
    caller: Annotated[Caller, Depends(authorize("payments.create_intent"))],
    payment_client: PaymentClientDep,
):
    """Create a Stripe PaymentIntent and return its client secret."""
    try:
        client_secret = await payment_client.create_payment_intent(
            amount_cents=body.amount,
            metadata={"email": caller.email, "purpose": body.purpose},
        )
    except stripe.StripeError as e:
        logger.warning(f"Payment intent creation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=e.user_message or str(e)
        )

    return {"clientSecret": client_secret}


@router.post("/transactions")
async def record_transaction(
    body: TransactionRequest,
    caller: Annotated[Caller, Depends(authorize("transactions.record"))],
    transaction_service: TransactionServiceDep,
):
    """Record a completed payment for the caller."""
    transaction = await transaction_service.record(
        email=caller.email,
        transaction_id=body.transaction_id,
        amount=body.amount,
        purpose=body.purpose,
    )
    return {"insertedId": transaction.id}
