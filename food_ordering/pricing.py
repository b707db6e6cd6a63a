"""
Cart -> priced line items. Pure logic, no Stripe and no database.
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List

from food_ordering.errors import InvalidQuantity, MenuItemNotFound


@dataclass(frozen=True)
class PricedLineItem:
    menu_item_id: str
    name: str
    unit_amount: int        # minor units
    quantity: int

    def to_stripe(self, currency: str) -> Dict[str, Any]:
        return {
            "price_data": {
                "currency": currency,
                "unit_amount": self.unit_amount,
                "product_data": {"name": self.name},
            },
            "quantity": self.quantity,
        }

    def to_cart_item(self) -> Dict[str, Any]:
        return {"menuItemId": self.menu_item_id, "name": self.name, "quantity": self.quantity}


def to_minor_units(amount) -> int:
    # str() first so floats like 9.95 don't drag their binary error along
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_quantity(raw) -> int:
    if isinstance(raw, bool):
        raise InvalidQuantity(raw)
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        raise InvalidQuantity(raw)
    if not value.is_finite() or value != value.to_integral_value() or value <= 0:
        raise InvalidQuantity(raw)
    return int(value)


def build_line_items(cart_items: Iterable, menu_items: Iterable) -> List[PricedLineItem]:
    """
    One priced line per cart entry.

    cart_items: objects with ``menu_item_id`` and ``quantity``
    menu_items: objects with ``id``, ``name`` and ``price`` (major units)

    Raises MenuItemNotFound on the first unknown id, so a partial list never
    leaves this function.
    """
    menu_by_id = {str(item.id): item for item in menu_items}

    line_items = []
    for cart_item in cart_items:
        menu_item = menu_by_id.get(str(cart_item.menu_item_id))
        if menu_item is None:
            raise MenuItemNotFound(cart_item.menu_item_id)

        line_items.append(PricedLineItem(
            menu_item_id=str(menu_item.id),
            name=menu_item.name,
            unit_amount=to_minor_units(menu_item.price),
            quantity=parse_quantity(cart_item.quantity),
        ))
    return line_items
