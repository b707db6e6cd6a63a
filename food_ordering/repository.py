"""
Order store adapter: the only place that talks to the session directly.
"""
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from food_ordering.models import Order, Restaurant


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, order: Order) -> Order:
        self.db.add(order)
        self._commit()
        return order

    def find_by_id(self, order_id: str) -> Optional[Order]:
        return self.db.get(Order, order_id)

    def find_by_user(self, user_id: str) -> List[Order]:
        return (
            self.db.query(Order)
            .options(joinedload(Order.restaurant), joinedload(Order.user))
            .filter(Order.user_id == user_id)
            .order_by(Order.created_at.desc())
            .all()
        )

    def save(self, order: Order) -> Order:
        self.db.add(order)
        self._commit()
        return order

    def _commit(self):
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


class RestaurantRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, restaurant_id: str) -> Optional[Restaurant]:
        return (
            self.db.query(Restaurant)
            .options(selectinload(Restaurant.menu_items))
            .filter(Restaurant.id == restaurant_id)
            .first()
        )
