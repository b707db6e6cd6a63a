from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CartItemIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    menu_item_id: str = Field(alias="menuItemId", min_length=1)
    name: Optional[str] = None
    quantity: Union[int, str]


class DeliveryDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(min_length=1)
    name: str = Field(min_length=1)
    address_line1: str = Field(alias="addressLine1", min_length=1)
    city: str = Field(min_length=1)


class CheckoutSessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cart_items: List[CartItemIn] = Field(alias="cartItems", min_length=1)
    delivery_details: DeliveryDetails = Field(alias="deliveryDetails")
    restaurant_id: str = Field(alias="restaurantId", min_length=1)


class CheckoutSessionResponse(BaseModel):
    url: str


# Read side: attributes come from the ORM, output is camelCase.

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: Optional[str] = None


class RestaurantOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    city: Optional[str] = None
    delivery_price: float = Field(serialization_alias="deliveryPrice")


class CartItemOut(BaseModel):
    menuItemId: str
    name: str
    quantity: int


class DeliveryDetailsOut(BaseModel):
    email: str
    name: str
    addressLine1: str
    city: str


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user: UserOut
    restaurant: RestaurantOut
    delivery_details: DeliveryDetailsOut = Field(serialization_alias="deliveryDetails")
    cart_items: List[CartItemOut] = Field(serialization_alias="cartItems")
    status: str
    total_amount: Optional[int] = Field(default=None, serialization_alias="totalAmount")
    created_at: datetime = Field(serialization_alias="createdAt")
