"""
Webhook deliveries signed like Stripe signs them, verified by the real SDK.

construct_event is not mocked here, so the reconciler sees the Event and
Session objects the SDK actually builds.
"""
import hashlib
import hmac
import json
import time

from food_ordering.models import Order
from test_api import add_order


def signed(body: bytes, secret: str = "whsec_test") -> str:
    ts = int(time.time())
    sig = hmac.new(secret.encode(), f"{ts}.".encode() + body, hashlib.sha256).hexdigest()
    return f"t={ts},v1={sig}"


def event_body(event_type="checkout.session.completed", amount_total=2200, metadata=None):
    return json.dumps({
        "id": "evt_signed",
        "object": "event",
        "type": event_type,
        "data": {
            "object": {
                "id": "cs_test_signed",
                "object": "checkout.session",
                "amount_total": amount_total,
                "metadata": metadata if metadata is not None else {},
            }
        },
    }).encode()


def post(client, body, signature=None):
    return client.post(
        "/api/order/checkout/webhook",
        content=body,
        headers={"stripe-signature": signature or signed(body)},
    )


def test_signed_completed_event_marks_order_paid(client, SessionLocal):
    add_order(SessionLocal, "ORDER-REAL")
    body = event_body(metadata={"orderId": "ORDER-REAL", "restaurantId": "rest-1"})

    response = post(client, body)

    assert response.status_code == 200
    assert response.content == b""
    db = SessionLocal()
    order = db.get(Order, "ORDER-REAL")
    assert order.status == "paid"
    assert order.total_amount == 2200
    db.close()


def test_signed_completed_event_delivered_twice(client, SessionLocal):
    add_order(SessionLocal, "ORDER-TWICE")
    body = event_body(metadata={"orderId": "ORDER-TWICE", "restaurantId": "rest-1"})

    assert post(client, body).status_code == 200
    assert post(client, body).status_code == 200

    db = SessionLocal()
    order = db.get(Order, "ORDER-TWICE")
    assert order.status == "paid"
    assert order.total_amount == 2200
    db.close()


def test_signed_completed_event_without_order_id(client, SessionLocal):
    add_order(SessionLocal, "ORDER-NOMETA")

    response = post(client, event_body(metadata={}))

    assert response.status_code == 400
    assert response.json() == {"message": "Missing orderId in webhook metadata"}
    db = SessionLocal()
    assert db.get(Order, "ORDER-NOMETA").status == "placed"
    db.close()


def test_signed_completed_event_unknown_order(client, SessionLocal):
    response = post(client, event_body(metadata={"orderId": "missing", "restaurantId": "rest-1"}))

    assert response.status_code == 404
    assert response.json() == {"message": "Order not found"}


def test_signed_unknown_event_type(client, SessionLocal):
    add_order(SessionLocal, "ORDER-OTHER")
    body = event_body(event_type="payment_intent.created", metadata={"orderId": "ORDER-OTHER"})

    response = post(client, body)

    assert response.status_code == 200
    db = SessionLocal()
    order = db.get(Order, "ORDER-OTHER")
    assert order.status == "placed"
    assert order.total_amount is None
    db.close()


def test_wrong_secret_never_mutates(client, SessionLocal):
    add_order(SessionLocal, "ORDER-FORGED")
    body = event_body(metadata={"orderId": "ORDER-FORGED"})

    response = post(client, body, signature=signed(body, secret="whsec_attacker"))

    assert response.status_code == 400
    db = SessionLocal()
    assert db.get(Order, "ORDER-FORGED").status == "placed"
    db.close()
