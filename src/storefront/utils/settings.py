"""Environment-driven settings.

Values are read on every call so tests can adjust the environment with
``monkeypatch.setenv`` without reloading modules. Built-in fallbacks for
secrets apply only in the sandbox environments.
"""

import os
from dataclasses import dataclass

SANDBOX_ENVIRONMENTS = ("development", "test")

SANDBOX_ADMIN_SECRET = "storefront-admin"
DEFAULT_CURRENCY = "INR"


@dataclass(frozen=True)
class PaymentSettings:
    """Credentials and defaults for the payment gateway."""

    provider: str
    key_id: str
    key_secret: str
    currency: str


def get_environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def is_development() -> bool:
    return get_environment() == "development"


def is_sandbox() -> bool:
    return get_environment() in SANDBOX_ENVIRONMENTS


def get_admin_secret() -> str:
    """The shared admin secret. Empty outside the sandbox when unset, which locks admin routes."""
    return os.getenv("ADMIN_SECRET", SANDBOX_ADMIN_SECRET if is_sandbox() else "")


def get_payment_settings() -> PaymentSettings:
    return PaymentSettings(
        provider=os.getenv("PAYMENT_GATEWAY", "fake").lower(),
        key_id=os.getenv("PAYMENT_KEY_ID", ""),
        key_secret=os.getenv("PAYMENT_KEY_SECRET", ""),
        currency=os.getenv("PAYMENT_CURRENCY", DEFAULT_CURRENCY),
    )


def get_cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
