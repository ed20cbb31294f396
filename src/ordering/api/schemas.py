"""Pydantic request/response schemas for the Ordering API.

These are external contracts, separate from the internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    street: str
    city: str
    state: str
    country: str
    zip_code: str
    phone: str


class EyePowerSchema(BaseModel):
    sphere: float | None = Field(None, ge=-20, le=20)
    cylinder: float | None = Field(None, ge=-6, le=6)
    axis: int | None = Field(None, ge=0, le=180)


class PowerSchema(BaseModel):
    left_eye: EyePowerSchema | None = None
    right_eye: EyePowerSchema | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)
    lens_type: str | None = None
    lens_color: str | None = None
    power: PowerSchema | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-aviator-001",
                    "quantity": 1,
                    "lens_type": "progressive",
                    "lens_color": "clear",
                    "power": {
                        "left_eye": {"sphere": -1.25, "cylinder": -0.5, "axis": 90},
                        "right_eye": {"sphere": -1.0, "cylinder": 0.0, "axis": 0},
                    },
                }
            ]
        }
    }


class UpdateCartItemRequest(BaseModel):
    quantity: int | None = Field(None, ge=1)
    lens_type: str | None = None
    lens_color: str | None = None
    power: PowerSchema | None = None


class CartItemResponse(BaseModel):
    item_id: str
    product_id: str
    quantity: int
    price: float
    lens_type: str | None = None
    lens_color: str | None = None
    power: PowerSchema | None = None


class CartResponse(BaseModel):
    customer_id: str
    items: list[CartItemResponse]
    total_items: int
    total_amount: float


class CartValidationResponse(BaseModel):
    is_valid: bool
    errors: list[dict]
    updated_items: list[dict]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    shipping_address: AddressSchema
    billing_address: AddressSchema
    payment_method: str
    shipping_method: str = "standard"
    notes: str | None = None
    checkout_id: str | None = Field(None, max_length=100)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": {
                        "street": "12 Harbour Road",
                        "city": "Mumbai",
                        "state": "MH",
                        "country": "India",
                        "zip_code": "400001",
                        "phone": "+91-9800000000",
                    },
                    "billing_address": {
                        "street": "12 Harbour Road",
                        "city": "Mumbai",
                        "state": "MH",
                        "country": "India",
                        "zip_code": "400001",
                        "phone": "+91-9800000000",
                    },
                    "payment_method": "upi",
                    "shipping_method": "express",
                    "notes": "Leave with the concierge",
                    "checkout_id": "chk-5f1c2e",
                }
            ]
        }
    }


class CancelOrderRequest(BaseModel):
    reason: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    order_status: str
    shipping_status: str | None = None
    tracking_number: str | None = None
    reason: str | None = None


class UpdatePaymentStatusRequest(BaseModel):
    payment_status: str


class OrderItemResponse(BaseModel):
    item_id: str
    product_id: str
    quantity: int
    price: float
    lens_type: str | None = None
    lens_color: str | None = None
    power: PowerSchema | None = None


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str
    items: list[OrderItemResponse]
    shipping_address: AddressSchema
    billing_address: AddressSchema
    payment_method: str
    shipping_method: str
    subtotal: float
    shipping_cost: float
    tax: float
    discount: float
    total: float
    currency: str
    notes: str | None = None
    order_status: str
    payment_status: str
    shipping_status: str
    tracking_number: str | None = None
    estimated_delivery_date: datetime | None = None
    payment_id: str | None = None
    transaction_id: str | None = None
    paid_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None
    refunded_at: datetime | None = None
    created_at: datetime | None = None


class PaginationSchema(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    pagination: PaginationSchema


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------
class ProcessPaymentRequest(BaseModel):
    order_id: str
    payment_method: str
    payment_details: dict = Field(default_factory=dict)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "order_id": "ord-7d1e",
                    "payment_method": "credit_card",
                    "payment_details": {
                        "card_number": "4111111111111111",
                        "card_type": "visa",
                        "card_holder_name": "Asha Rao",
                        "expiry_date": "09/28",
                    },
                }
            ]
        }
    }


class RefundRequest(BaseModel):
    reason: str | None = None


class PaymentResponse(BaseModel):
    payment_id: str
    order_id: str
    amount: float
    currency: str
    payment_method: str
    payment_status: str
    payment_gateway: str | None = None
    transaction_id: str
    payment_details: dict
    error_code: str | None = None
    paid_at: datetime | None = None
    refund_amount: float | None = None
    refund_reason: str | None = None
    refund_date: datetime | None = None
    created_at: datetime | None = None


class PaymentWithOrderResponse(BaseModel):
    payment: PaymentResponse
    order: OrderResponse


class PaymentListResponse(BaseModel):
    payments: list[PaymentResponse]
    pagination: PaginationSchema


# ---------------------------------------------------------------------------
# Wishlist
# ---------------------------------------------------------------------------
class AddToWishlistRequest(BaseModel):
    product_id: str


class WishlistResponse(BaseModel):
    customer_id: str
    product_ids: list[str]
    product_count: int


class WishlistCheckResponse(BaseModel):
    product_id: str
    in_wishlist: bool


# ---------------------------------------------------------------------------
# Generic
# ---------------------------------------------------------------------------
class IdResponse(BaseModel):
    id: str


class StatusResponse(BaseModel):
    status: str = "ok"
