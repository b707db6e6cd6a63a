import logging

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from food_ordering.auth import get_current_user_id
from food_ordering.checkout import create_checkout_session
from food_ordering.database import get_db
from food_ordering.errors import CheckoutError
from food_ordering.repository import OrderRepository, RestaurantRepository
from food_ordering.schemas import CheckoutSessionRequest, CheckoutSessionResponse, OrderOut
from food_ordering.stripe_service import StripeGateway, get_gateway
from food_ordering.webhook import reconcile_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/order")


@router.get("")
def get_my_orders(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    try:
        orders = OrderRepository(db).find_by_user(user_id)
        return [OrderOut.model_validate(order).model_dump(mode="json", by_alias=True) for order in orders]
    except Exception:
        logger.exception("Failed to list orders for user %s", user_id)
        return JSONResponse(status_code=500, content={"message": "something went wrong"})


@router.post("/checkout/create-checkout-session", response_model=CheckoutSessionResponse)
def create_checkout_session_api(
    request: CheckoutSessionRequest,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    gateway: StripeGateway = Depends(get_gateway),
):
    try:
        url = create_checkout_session(
            request,
            user_id,
            orders=OrderRepository(db),
            restaurants=RestaurantRepository(db),
            gateway=gateway,
        )
    except CheckoutError:
        raise
    except Exception:
        logger.exception("Checkout failed for restaurant %s", request.restaurant_id)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    return {"url": url}


@router.post("/checkout/webhook", include_in_schema=False)
async def stripe_webhook(
    request: Request,
    stripe_signature: str = Header(None),
    db: Session = Depends(get_db),
    gateway: StripeGateway = Depends(get_gateway),
):
    # raw bytes, never the parsed JSON: the signature covers the exact body
    payload = await request.body()

    try:
        outcome = await run_in_threadpool(
            reconcile_event,
            payload,
            stripe_signature,
            secret=request.app.state.settings.stripe_webhook_secret,
            gateway=gateway,
            orders=OrderRepository(db),
        )
    except CheckoutError:
        raise
    except Exception:
        logger.exception("Error updating order status")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    logger.debug("Stripe webhook handled: %s", outcome.value)
    return Response(status_code=200)
