"""Storefront bounded context: Catalog, Reviews, Orders and Payments.

Handles the document-backed product catalog, customer reviews with a
derived rating aggregate, payment-verified order capture, and curated
product lists for the homepage. CQRS throughout: every aggregate is stored
as its current state and queried directly.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
