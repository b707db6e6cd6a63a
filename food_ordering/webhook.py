"""
Stripe webhook reconciliation.

Only ``checkout.session.completed`` moves an order, and only ever to ``paid``
with the amount Stripe settled. Applying the same event twice leaves the
order exactly as the first delivery did.
"""
import enum
import logging

from food_ordering.errors import MalformedEvent, MissingOrderMetadata, OrderNotFound
from food_ordering.models import OrderStatus
from food_ordering.repository import OrderRepository
from food_ordering.stripe_service import StripeGateway

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"


def _field(obj, key):
    # StripeObject is a mapping but not a dict: no .get()
    return obj[key] if key in obj else None


class WebhookOutcome(str, enum.Enum):
    IGNORED = "ignored"
    RECONCILED = "reconciled"


def reconcile_event(
    payload: bytes,
    signature: str,
    *,
    secret: str,
    gateway: StripeGateway,
    orders: OrderRepository,
) -> WebhookOutcome:
    event = gateway.construct_event(payload, signature, secret)

    if event["type"] != CHECKOUT_COMPLETED:
        logger.debug("Ignoring Stripe event %s", event["type"])
        return WebhookOutcome.IGNORED

    session = event["data"]["object"]
    metadata = _field(session, "metadata") or {}

    order_id = _field(metadata, "orderId")
    if not order_id:
        logger.error("Missing orderId in webhook metadata")
        raise MissingOrderMetadata()

    amount_total = _field(session, "amount_total")
    if isinstance(amount_total, bool) or not isinstance(amount_total, int) or amount_total < 0:
        logger.error("Invalid amount_total %r for order %s", amount_total, order_id)
        raise MalformedEvent(f"Invalid amount_total in webhook event: {amount_total!r}")

    order = orders.find_by_id(order_id)
    if order is None:
        logger.error("Order not found: %s (restaurant %s)", order_id, _field(metadata, "restaurantId"))
        raise OrderNotFound(order_id)

    if order.status == OrderStatus.PAID.value and order.total_amount == amount_total:
        logger.info("Order %s already paid, duplicate delivery acknowledged", order_id)
        return WebhookOutcome.RECONCILED

    order.total_amount = amount_total
    order.status = OrderStatus.PAID.value
    orders.save(order)
    logger.info("Order marked as paid: %s", order_id)
    return WebhookOutcome.RECONCILED
