# expense_backend/config.py
import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def _hours(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class Config:
    # External store (Supabase, service role)
    SUPABASE_URL = os.environ.get("SUPABASE_URL")
    SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")

    # Token signing
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY") or os.environ.get("JWT_SECRET")
    TOKEN_EXPIRES_HOURS = _hours(os.environ.get("TOKEN_EXPIRES_HOURS"), 168)

    # Classifier (Gemini)
    GOOGLE_API_KEY = os.environ.get("GOOGLE_API_KEY")
    GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-1.5-flash")

    # Manual inserts on behalf of another user need this key
    ADMIN_API_KEY = os.environ.get("ADMIN_API_KEY")

    EXPENSE_CURRENCY = os.environ.get("EXPENSE_CURRENCY", "INR")
    EXPENSE_CURRENCY_SYMBOL = os.environ.get("EXPENSE_CURRENCY_SYMBOL", "₹")

    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    PORT = int(os.environ.get("PORT", 3000))


def token_lifetime(hours):
    """Translate TOKEN_EXPIRES_HOURS into the JWT_ACCESS_TOKEN_EXPIRES value.

    ``0`` (or a negative number) keeps tokens valid until the secret rotates.
    """
    if not hours or hours <= 0:
        return False
    return timedelta(hours=hours)


def cors_origins(raw):
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    if not origins or origins == ["*"]:
        return "*"
    return origins
