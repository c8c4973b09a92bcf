"""Request authentication for admin and customer routes.

Admin routes are guarded by an ``AdminAuthenticator``. The shared-secret
scheme is the only one implemented; the secret travels in the
``X-Admin-Secret`` header or the ``secret`` query parameter.

Customer routes identify the caller by a bearer token that is the
customer's email address.
"""

import hmac
from abc import ABC, abstractmethod

from fastapi import Header, HTTPException, Query

from storefront.utils.settings import get_admin_secret


class AdminAuthenticator(ABC):
    @abstractmethod
    def authenticate(self, credential: str | None) -> bool:
        """Return True when ``credential`` grants admin access."""
        ...


class SharedSecretAuthenticator(AdminAuthenticator):
    def __init__(self, secret: str | None = None) -> None:
        self._secret = secret

    @property
    def secret(self) -> str:
        return self._secret if self._secret is not None else get_admin_secret()

    def authenticate(self, credential: str | None) -> bool:
        if not credential or not self.secret:
            return False
        return hmac.compare_digest(credential.encode("utf-8"), self.secret.encode("utf-8"))


_current_authenticator: AdminAuthenticator | None = None


def get_authenticator() -> AdminAuthenticator:
    global _current_authenticator
    if _current_authenticator is None:
        _current_authenticator = SharedSecretAuthenticator()
    return _current_authenticator


def set_authenticator(authenticator: AdminAuthenticator) -> None:
    global _current_authenticator
    _current_authenticator = authenticator


def reset_authenticator() -> None:
    global _current_authenticator
    _current_authenticator = None


async def require_admin(
    x_admin_secret: str | None = Header(default=None),
    secret: str | None = Query(default=None),
) -> None:
    if not get_authenticator().authenticate(x_admin_secret or secret):
        raise HTTPException(status_code=401, detail="Unauthorized")


async def customer_email(authorization: str | None = Header(default=None)) -> str:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")
    return token.strip()
