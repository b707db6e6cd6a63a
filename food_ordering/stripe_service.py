import logging
from dataclasses import dataclass
from typing import List

import stripe
from fastapi import Request

from food_ordering.errors import SessionCreationFailed, WebhookSignatureError
from food_ordering.pricing import PricedLineItem, to_minor_units

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: str


class StripeGateway:
    """Thin wrapper around the Stripe SDK; every call carries its own api_key."""

    def __init__(self, api_key: str, frontend_url: str, currency: str = "usd"):
        self.api_key = api_key
        self.frontend_url = frontend_url.rstrip("/")
        self.currency = currency

    def create_session(
        self,
        line_items: List[PricedLineItem],
        delivery_price,
        order_id: str,
        restaurant_id: str,
    ) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                line_items=[item.to_stripe(self.currency) for item in line_items],
                shipping_options=[
                    {
                        "shipping_rate_data": {
                            "display_name": "Delivery",
                            "type": "fixed_amount",
                            "fixed_amount": {
                                "amount": to_minor_units(delivery_price),
                                "currency": self.currency,
                            },
                        },
                    },
                ],
                mode="payment",
                metadata={
                    "orderId": order_id,
                    "restaurantId": restaurant_id,
                },
                success_url=f"{self.frontend_url}/order-status?success=true",
                cancel_url=f"{self.frontend_url}/detail/{restaurant_id}?cancelled=true",
            )
        except stripe.StripeError as exc:
            logger.error("Failed to create session for order %s: %s", order_id, exc)
            raise SessionCreationFailed(exc) from exc

        if not getattr(session, "url", None):
            logger.error("Stripe returned a session without url for order %s", order_id)
            raise SessionCreationFailed()

        return CheckoutSession(id=session.id, url=session.url)

    def expire_session(self, session_id: str):
        return stripe.checkout.Session.expire(session_id, api_key=self.api_key)

    def construct_event(self, payload: bytes, signature: str, secret: str):
        """Verify the Stripe-Signature header against the untouched request body."""
        if not signature:
            raise WebhookSignatureError("Missing Stripe-Signature header")
        try:
            return stripe.Webhook.construct_event(payload, signature, secret)
        except ValueError as exc:
            logger.warning("Rejected Stripe webhook, unparseable payload: %s", exc)
            raise WebhookSignatureError("Invalid payload") from exc
        except stripe.SignatureVerificationError as exc:
            logger.warning("Rejected Stripe webhook, bad signature: %s", exc)
            raise WebhookSignatureError("Invalid signature") from exc


def get_gateway(request: Request) -> StripeGateway:
    return request.app.state.gateway
