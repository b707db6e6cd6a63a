from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from food_ordering.auth import get_current_user_id
from food_ordering.config import Settings
from food_ordering.database import Base
from food_ordering.main import create_app
from food_ordering.models import MenuItem, Restaurant, User

USER_ID = "user-1"
OTHER_USER_ID = "user-2"
RESTAURANT_ID = "rest-1"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        stripe_api_key="sk_test_123",
        stripe_webhook_secret="whsec_test",
        frontend_url="http://localhost:5173",
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-jwt-secret",
    )


@pytest.fixture
def fastapi_app(settings):
    app = create_app(settings)
    yield app
    Base.metadata.drop_all(bind=app.state.engine)
    app.state.engine.dispose()


@pytest.fixture
def SessionLocal(fastapi_app):
    SessionLocal = fastapi_app.state.session_factory
    db = SessionLocal()
    db.add_all([
        User(id=USER_ID, auth_id="auth0|123", email="diner@example.com", name="Diner"),
        User(id=OTHER_USER_ID, auth_id="auth0|456", email="other@example.com", name="Other"),
        Restaurant(
            id=RESTAURANT_ID,
            name="Burger Palace",
            city="London",
            delivery_price=Decimal("3.00"),
            menu_items=[
                MenuItem(id="A", name="Burger", price=Decimal("9.50")),
                MenuItem(id="B", name="Fries", price=Decimal("2.25")),
            ],
        ),
    ])
    db.commit()
    db.close()
    return SessionLocal


@pytest.fixture
def client(fastapi_app, SessionLocal):
    # Bypass auth verification for tests
    fastapi_app.dependency_overrides[get_current_user_id] = lambda: USER_ID
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def checkout_payload():
    return {
        "cartItems": [{"menuItemId": "A", "name": "Burger", "quantity": "2"}],
        "deliveryDetails": {
            "email": "diner@example.com",
            "name": "Diner",
            "addressLine1": "1 High Street",
            "city": "London",
        },
        "restaurantId": RESTAURANT_ID,
    }


@pytest.fixture
def stripe_session(mocker):
    mock_session = mocker.Mock()
    mock_session.id = "cs_test_123"
    mock_session.url = "https://checkout.stripe.com/c/pay/cs_test_123"
    return mocker.patch("stripe.checkout.Session.create", return_value=mock_session)


@pytest.fixture
def make_event():
    def _make(order_id="ORDER", amount_total=4250, event_type="checkout.session.completed", **metadata):
        meta = {"orderId": order_id, "restaurantId": RESTAURANT_ID}
        meta.update(metadata)
        return {
            "id": "evt_test",
            "type": event_type,
            "data": {
                "object": {
                    "id": "cs_test_123",
                    "amount_total": amount_total,
                    "metadata": {k: v for k, v in meta.items() if v is not None},
                }
            },
        }
    return _make
