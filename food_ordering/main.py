import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from food_ordering.config import Settings, load_settings
from food_ordering.database import Base, build_engine, build_session_factory
from food_ordering.errors import CheckoutError
from food_ordering.routes import router
from food_ordering.stripe_service import StripeGateway

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the service. Run with:

        uvicorn food_ordering.main:create_app --factory
    """
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="Food Ordering Checkout Service")

    engine = build_engine(settings.database_url)
    Base.metadata.create_all(bind=engine)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.gateway = StripeGateway(
        api_key=settings.stripe_api_key,
        frontend_url=settings.frontend_url,
        currency=settings.currency,
    )

    app.include_router(router)

    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(request: Request, exc: CheckoutError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    return app
