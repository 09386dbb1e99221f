"""Stripe payment provider wrapper."""

import logging

import stripe

logger = logging.getLogger(__name__)


class PaymentClient:
    """Creates Stripe PaymentIntents for role-upgrade fees and donations."""

    def __init__(self, secret_key: str, currency: str = "usd"):
        """
        Initialize payment client.

        Args:
            secret_key: Stripe secret API key.
            currency: ISO currency code used for every intent.
        """
        self._secret_key = secret_key
        self.currency = currency

    async def create_payment_intent(self, amount_cents: int, metadata: dict[str, str]) -> str:
        """
        Create a PaymentIntent and return its client secret.

        Args:
            amount_cents: Amount in the smallest currency unit.
            metadata: Key/value pairs stored on the intent; ``purpose`` is
                also used for the description.

        Raises:
            stripe.StripeError: If Stripe rejects the request.
        """
        purpose = metadata.get("purpose", "charity-role")
        intent = stripe.PaymentIntent.create(
            api_key=self._secret_key,
            amount=amount_cents,
            currency=self.currency,
            description=f"PlateShare: {purpose}",
            metadata=metadata,
            automatic_payment_methods={"enabled": True},
        )
        logger.info(f"Created payment intent {intent.id} for {amount_cents} {self.currency}")
        return intent.client_secret
