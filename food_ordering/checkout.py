"""
Checkout orchestration: restaurant -> pending order -> Stripe session -> persist.

The order row is written only once Stripe has handed back a session url, so a
``placed`` order always has a payment attempt behind it.
"""
import logging
from datetime import datetime
from typing import Optional

from food_ordering.errors import RestaurantNotFound
from food_ordering.models import Order, OrderStatus, new_id, utcnow
from food_ordering.pricing import build_line_items
from food_ordering.repository import OrderRepository, RestaurantRepository
from food_ordering.schemas import CheckoutSessionRequest
from food_ordering.stripe_service import StripeGateway

logger = logging.getLogger(__name__)


def create_checkout_session(
    request: CheckoutSessionRequest,
    user_id: str,
    *,
    orders: OrderRepository,
    restaurants: RestaurantRepository,
    gateway: StripeGateway,
    now: Optional[datetime] = None,
) -> str:
    restaurant = restaurants.find_by_id(request.restaurant_id)
    if restaurant is None:
        raise RestaurantNotFound(request.restaurant_id)

    # id is needed as session metadata before the row exists
    order = Order(
        id=new_id(),
        user_id=user_id,
        restaurant_id=restaurant.id,
        status=OrderStatus.PLACED.value,
        delivery_details=request.delivery_details.model_dump(by_alias=True),
        created_at=now or utcnow(),
    )

    line_items = build_line_items(request.cart_items, restaurant.menu_items)
    order.cart_items = [item.to_cart_item() for item in line_items]

    session = gateway.create_session(
        line_items,
        restaurant.delivery_price,
        order_id=order.id,
        restaurant_id=restaurant.id,
    )

    try:
        orders.create(order)
    except Exception:
        logger.exception("Could not persist order %s after session %s was created", order.id, session.id)
        _expire_quietly(gateway, session.id)
        raise

    logger.info("Order %s placed for user %s (session %s)", order.id, user_id, session.id)
    return session.url


def _expire_quietly(gateway: StripeGateway, session_id: str):
    try:
        gateway.expire_session(session_id)
        logger.warning("Expired checkout session %s", session_id)
    except Exception:
        logger.exception("Failed to expire checkout session %s", session_id)
