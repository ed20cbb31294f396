"""Order pricing rules: shipping, tax, delivery estimates and totals.

Pure functions with no domain state. Unknown shipping methods fall back to
free shipping and a five day estimate; callers that accept user input
validate the method before reaching here.
"""

from datetime import datetime, timedelta
from enum import Enum

FREE_SHIPPING_THRESHOLD = 100.0
TAX_RATE = 0.10


class ShippingMethod(Enum):
    STANDARD = "standard"
    EXPRESS = "express"
    NEXT_DAY = "next_day"


_FLAT_RATES = {
    ShippingMethod.EXPRESS.value: 20.0,
    ShippingMethod.NEXT_DAY.value: 30.0,
}

_DELIVERY_DAYS = {
    ShippingMethod.STANDARD.value: 5,
    ShippingMethod.EXPRESS.value: 2,
    ShippingMethod.NEXT_DAY.value: 1,
}


def is_known_shipping_method(method) -> bool:
    return method in {m.value for m in ShippingMethod}


def shipping_cost(method: str, subtotal: float) -> float:
    """Shipping charge for an order.

    Standard shipping is free only when the subtotal is strictly above the
    threshold: an order of exactly 100.00 still pays 10.00.
    """
    if method == ShippingMethod.STANDARD.value:
        return 0.0 if subtotal > FREE_SHIPPING_THRESHOLD else 10.0
    return _FLAT_RATES.get(method, 0.0)


def tax(subtotal: float) -> float:
    """Flat 10% tax, rounded to cents."""
    return round(subtotal * TAX_RATE, 2)


def estimated_delivery_date(method: str, from_: datetime | None = None) -> datetime:
    start = from_ or datetime.now()
    return start + timedelta(days=_DELIVERY_DAYS.get(method, 5))


def order_total(subtotal: float, tax: float, shipping_cost: float, discount: float = 0.0) -> float:
    return round(subtotal + tax + shipping_cost - (discount or 0.0), 2)


def effective_price(price: float, offer_price: float | None) -> float:
    """Offer price when it undercuts the list price, list price otherwise."""
    if offer_price is not None and offer_price < price:
        return offer_price
    return price
