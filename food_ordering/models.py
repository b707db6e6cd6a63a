import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Numeric, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from food_ordering.database import Base


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(str, enum.Enum):
    PLACED = "placed"
    PAID = "paid"


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=new_id)
    auth_id = Column(String, unique=True, index=True, nullable=False)   # JWT "sub"
    email = Column(String, nullable=False)
    name = Column(String)


class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    city = Column(String)
    delivery_price = Column(Numeric(10, 2), nullable=False)             # major units

    menu_items = relationship("MenuItem", back_populates="restaurant", cascade="all, delete-orphan")


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(String, primary_key=True, default=new_id)
    restaurant_id = Column(String, ForeignKey("restaurants.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)                      # major units

    restaurant = relationship("Restaurant", back_populates="menu_items")


class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, default=new_id)
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    restaurant_id = Column(String, ForeignKey("restaurants.id"), nullable=False)
    delivery_details = Column(JSON, nullable=False)     # {email, name, addressLine1, city}
    cart_items = Column(JSON, nullable=False)           # [{menuItemId, name, quantity}]
    status = Column(String, nullable=False, default=OrderStatus.PLACED.value)  # placed | paid
    total_amount = Column(Integer)                      # minor units, set on payment only
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User")
    restaurant = relationship("Restaurant")
