import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

# Force-load .env (Windows-safe, reload-safe)
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"

REQUIRED = (
    "STRIPE_API_KEY",
    "STRIPE_WEBHOOK_SECRET",
    "FRONTEND_URL",
    "DATABASE_URL",
    "JWT_SECRET",
)


@dataclass(frozen=True)
class Settings:
    stripe_api_key: str
    stripe_webhook_secret: str
    frontend_url: str
    database_url: str
    jwt_secret: str
    currency: str = "usd"
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read the environment once and fail fast on anything missing."""
    load_dotenv(dotenv_path=ENV_PATH)

    missing = [name for name in REQUIRED if not os.getenv(name)]
    if missing:
        raise RuntimeError(
            f"{', '.join(missing)} not set. Check your .env file."
        )

    return Settings(
        stripe_api_key=os.environ["STRIPE_API_KEY"],
        stripe_webhook_secret=os.environ["STRIPE_WEBHOOK_SECRET"],
        frontend_url=os.environ["FRONTEND_URL"].rstrip("/"),
        database_url=os.environ["DATABASE_URL"],
        jwt_secret=os.environ["JWT_SECRET"],
        currency=os.getenv("CURRENCY", "usd").lower(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
