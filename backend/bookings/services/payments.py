from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

import stripe
from django.conf import settings

logger = logging.getLogger(__name__)

STATUS_SUCCEEDED = "succeeded"


class PaymentGatewayNotConfigured(RuntimeError):
    pass


class PaymentVerificationError(Exception):
    """The payment intent cannot back a booking for this hotel and user."""


class PaymentIntentNotFound(PaymentVerificationError):
    def __init__(self):
        super().__init__("Payment intent not found.")


class PaymentIntentMismatch(PaymentVerificationError):
    def __init__(self):
        super().__init__("Payment intent mismatch.")


class PaymentNotSucceeded(PaymentVerificationError):
    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Payment intent not succeeded. Status: {status}")


@dataclass(frozen=True)
class StripeConfig:
    secret_key: str
    currency: str = "usd"

    @classmethod
    def from_settings(cls) -> "StripeConfig":
        return cls(
            secret_key=getattr(settings, "STRIPE_SECRET_KEY", ""),
            currency=getattr(settings, "STRIPE_CURRENCY", "usd") or "usd",
        )


def to_minor_units(amount: Decimal) -> int:
    """Convert a decimal amount into integer cents, rounding half up."""
    cents = (Decimal(amount) * Decimal("100")).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(cents)


def from_minor_units(amount_cents: int) -> Decimal:
    return (Decimal(amount_cents) / Decimal("100")).quantize(Decimal("0.01"))


class PaymentGateway:
    """
    Thin wrapper around the Stripe PaymentIntent API.

    Credentials travel with every call so the SDK's module-level
    ``stripe.api_key`` is never touched.
    """

    def __init__(self, config: StripeConfig):
        if not config.secret_key:
            raise PaymentGatewayNotConfigured("Stripe secret key is not configured.")
        self.config = config

    def create_payment_intent(self, *, amount_cents: int, hotel_id: str, user_id: str):
        return stripe.PaymentIntent.create(
            amount=amount_cents,
            currency=self.config.currency,
            metadata={
                "hotel_id": hotel_id,
                "user_id": user_id,
            },
            api_key=self.config.secret_key,
        )

    def retrieve_payment_intent(self, payment_intent_id: str) -> Optional[Any]:
        """Fetch the intent from Stripe; ``None`` when Stripe has no such intent."""
        try:
            return stripe.PaymentIntent.retrieve(
                payment_intent_id,
                api_key=self.config.secret_key,
            )
        except stripe.InvalidRequestError as exc:
            if getattr(exc, "code", None) == "resource_missing":
                logger.warning("Stripe has no payment intent %s", payment_intent_id)
                return None
            raise


def verify_payment_intent(intent, *, hotel_id: str, user_id: str) -> None:
    """
    Check, in order, that the intent exists, belongs to this hotel and user,
    and has succeeded. Raises a ``PaymentVerificationError`` subclass otherwise.
    """

    if intent is None:
        raise PaymentIntentNotFound()

    metadata = getattr(intent, "metadata", None) or {}
    if metadata.get("hotel_id") != hotel_id or metadata.get("user_id") != user_id:
        raise PaymentIntentMismatch()

    if intent.status != STATUS_SUCCEEDED:
        raise PaymentNotSucceeded(intent.status)


def get_payment_gateway() -> PaymentGateway:
    return PaymentGateway(StripeConfig.from_settings())
