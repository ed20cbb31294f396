"""Ordering bounded context: shopping carts, orders, payments and wishlists.

Carts are converted into orders at checkout and orders are paid and refunded
through the payment gateway port. Product data comes from the catalogue
through the catalog port, never by touching catalogue aggregates directly.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
