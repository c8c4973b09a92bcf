"""Error taxonomy for the storefront.

Input validation failures use Protean's ``ValidationError`` directly; the
classes here cover the remaining outcomes a caller has to tell apart. Each
carries the HTTP status the API layer answers with.
"""


class StorefrontError(Exception):
    """Base class for storefront failures with a stable, client-safe message."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(StorefrontError):
    """A referenced entity does not exist."""

    status_code = 404


class SignatureInvalidError(StorefrontError):
    """A payment confirmation failed signature verification."""

    status_code = 400


class ConflictError(StorefrontError):
    """A uniqueness constraint would be violated."""

    status_code = 409


class GatewayError(StorefrontError):
    """The external payment gateway rejected or failed a request."""

    status_code = 502


class StoreError(StorefrontError):
    """The persistence layer failed."""

    status_code = 500
