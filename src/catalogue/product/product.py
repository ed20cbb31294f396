"""Product aggregate root for eyewear frames and lenses."""

from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from catalogue.domain import catalogue


class Gender(Enum):
    """Enumeration of the audiences a frame is designed for."""

    MEN = "men"
    WOMEN = "women"
    UNISEX = "unisex"
    KIDS = "kids"


class FrameType(Enum):
    """Enumeration of frame categories sold by the store."""

    SUNGLASSES = "sunglasses"
    SCREEN_GLASSES = "screen_glasses"
    POWER_GLASSES = "power_glasses"


def effective_price(price, offer_price):
    """The price a customer pays: the offer price when it undercuts the list price."""
    if offer_price is not None and offer_price < price:
        return offer_price
    return price


@catalogue.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=200)
    description: Text()
    brand: String(max_length=100)
    category_id: Identifier()
    gender: String(choices=Gender, default=Gender.UNISEX.value)
    frame_type: String(choices=FrameType, required=True)
    frame_material: String(max_length=50)
    frame_color: String(max_length=50)
    lens_type: String(max_length=50)
    lens_color: String(max_length=50)
    price: Float(required=True, min_value=0.0)
    offer_price: Float(min_value=0.0)
    stock: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def offer_price_must_undercut_price(self):
        if self.offer_price is not None and self.offer_price >= self.price:
            raise ValidationError({"offer_price": ["Offer price must be less than the regular price"]})

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    @property
    def effective_price(self):
        return effective_price(self.price, self.offer_price)

    @classmethod
    def create(
        cls,
        name,
        frame_type,
        price,
        offer_price=None,
        stock=0,
        category_id=None,
        description=None,
        brand=None,
        gender=None,
        frame_material=None,
        frame_color=None,
        lens_type=None,
        lens_color=None,
    ):
        from catalogue.product.events import ProductCreated

        now = datetime.now()
        product = cls(
            name=name,
            frame_type=frame_type,
            price=price,
            offer_price=offer_price,
            stock=stock or 0,
            category_id=category_id,
            description=description,
            brand=brand,
            gender=gender or Gender.UNISEX.value,
            frame_material=frame_material,
            frame_color=frame_color,
            lens_type=lens_type,
            lens_color=lens_color,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                frame_type=frame_type,
                price=price,
                offer_price=offer_price,
                stock=product.stock,
                created_at=now,
            )
        )
        return product

    def update_pricing(self, price, offer_price=None):
        from catalogue.product.events import ProductPriceChanged

        previous_price = self.price
        previous_offer_price = self.offer_price

        with atomic_change(self):
            self.price = price
            self.offer_price = offer_price
            self.updated_at = datetime.now()

        self.raise_(
            ProductPriceChanged(
                product_id=self.id,
                previous_price=previous_price,
                previous_offer_price=previous_offer_price,
                new_price=self.price,
                new_offer_price=self.offer_price,
            )
        )

    def adjust_stock(self, quantity_change, reason=None):
        from catalogue.product.events import StockAdjusted

        new_stock = (self.stock or 0) + quantity_change
        if new_stock < 0:
            raise ValidationError({"stock": [f"Cannot remove {-quantity_change} units, only {self.stock} in stock"]})

        previous_stock = self.stock
        self.stock = new_stock
        self.updated_at = datetime.now()

        self.raise_(
            StockAdjusted(
                product_id=self.id,
                previous_stock=previous_stock,
                new_stock=new_stock,
                reason=reason,
            )
        )

    def activate(self):
        from catalogue.product.events import ProductActivated

        if self.is_active:
            raise ValidationError({"is_active": ["Product is already active"]})

        self.is_active = True
        self.updated_at = datetime.now()
        self.raise_(ProductActivated(product_id=self.id))

    def deactivate(self):
        from catalogue.product.events import ProductDeactivated

        if not self.is_active:
            raise ValidationError({"is_active": ["Product is already inactive"]})

        self.is_active = False
        self.updated_at = datetime.now()
        self.raise_(ProductDeactivated(product_id=self.id))
