"""
Error taxonomy for checkout and payment reconciliation.

Every error carries the HTTP status it maps to; the app turns them into
``{"message": ...}`` bodies. Anything that is not a ``CheckoutError`` is an
unexpected failure and ends up as a generic 500.
"""
from typing import Optional


class CheckoutError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientInputError(CheckoutError):
    status_code = 400


class RestaurantNotFound(ClientInputError):
    status_code = 404

    def __init__(self, restaurant_id: str):
        super().__init__("Restaurant not found")
        self.restaurant_id = restaurant_id


class MenuItemNotFound(ClientInputError):
    def __init__(self, menu_item_id: str):
        super().__init__(f"Menu item not found: {menu_item_id}")
        self.menu_item_id = menu_item_id


class InvalidQuantity(ClientInputError):
    def __init__(self, raw):
        super().__init__(f"Invalid quantity: {raw!r}")
        self.raw = raw


class TrustBoundaryError(CheckoutError):
    status_code = 400


class WebhookSignatureError(TrustBoundaryError):
    def __init__(self, reason: str):
        super().__init__(f"Webhook error: {reason}")


class MissingOrderMetadata(ClientInputError):
    def __init__(self):
        super().__init__("Missing orderId in webhook metadata")


class MalformedEvent(ClientInputError):
    pass


class ConsistencyError(CheckoutError):
    status_code = 404


class OrderNotFound(ConsistencyError):
    def __init__(self, order_id: str):
        super().__init__("Order not found")
        self.order_id = order_id


class IntegrationError(CheckoutError):
    status_code = 500


class SessionCreationFailed(IntegrationError):
    def __init__(self, cause: Optional[Exception] = None):
        super().__init__("Error creating Stripe session")
        self.cause = cause
