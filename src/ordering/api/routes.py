"""FastAPI routes for the Ordering domain: cart, orders, payments and wishlist.

Thin adapters that translate HTTP requests into domain commands. The
customer always comes from the request identity, never from the body.
"""

import json
import math
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from ordering.api.dependencies import Customer, current_customer, require_admin
from ordering.api.schemas import (
    AddToCartRequest,
    AddToWishlistRequest,
    CancelOrderRequest,
    CartItemResponse,
    CartResponse,
    CartValidationResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    PaginationSchema,
    PaymentListResponse,
    PaymentResponse,
    PaymentWithOrderResponse,
    PlaceOrderRequest,
    ProcessPaymentRequest,
    RefundRequest,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
    UpdatePaymentStatusRequest,
    WishlistCheckResponse,
    WishlistResponse,
)
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartItem
from ordering.cart.management import ClearCart, ValidateCart, get_or_create_cart
from ordering.lens import eye_power_to_dict
from ordering.order.cancellation import CancelOrder, get_customer_order
from ordering.order.checkout import PlaceOrder
from ordering.order.order import Order
from ordering.order.status import UpdateOrderStatus, UpdatePaymentStatus
from ordering.payment.details import details_to_dict
from ordering.payment.payment import Payment
from ordering.payment.processing import charge_order
from ordering.payment.refund import RequestRefund, get_customer_payment
from ordering.wishlist.management import AddToWishlist, ClearWishlist, RemoveFromWishlist
from ordering.wishlist.wishlist import Wishlist

CurrentCustomer = Annotated[Customer, Depends(current_customer)]
Admin = Annotated[Customer, Depends(require_admin)]


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------
def _power_json(power):
    if power is None:
        return None
    return json.dumps(power.model_dump())


def _power_of(item):
    if item.left_eye is None and item.right_eye is None:
        return None
    return {"left_eye": eye_power_to_dict(item.left_eye), "right_eye": eye_power_to_dict(item.right_eye)}


def _address_of(address):
    return {
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "country": address.country,
        "zip_code": address.zip_code,
        "phone": address.phone,
    }


def _cart_response(cart) -> CartResponse:
    return CartResponse(
        customer_id=str(cart.customer_id),
        items=[
            CartItemResponse(
                item_id=str(i.id),
                product_id=str(i.product_id),
                quantity=i.quantity,
                price=i.price,
                lens_type=i.lens_type,
                lens_color=i.lens_color,
                power=_power_of(i),
            )
            for i in cart.items
        ],
        total_items=cart.total_items or 0,
        total_amount=cart.total_amount or 0.0,
    )


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        customer_id=str(order.customer_id),
        items=[
            OrderItemResponse(
                item_id=str(i.id),
                product_id=str(i.product_id),
                quantity=i.quantity,
                price=i.price,
                lens_type=i.lens_type,
                lens_color=i.lens_color,
                power=_power_of(i),
            )
            for i in order.items
        ],
        shipping_address=_address_of(order.shipping_address),
        billing_address=_address_of(order.billing_address),
        payment_method=order.payment_method,
        shipping_method=order.shipping_method,
        subtotal=order.subtotal,
        shipping_cost=order.shipping_cost,
        tax=order.tax,
        discount=order.discount or 0.0,
        total=order.total,
        currency=order.currency,
        notes=order.notes,
        order_status=order.order_status,
        payment_status=order.payment_status,
        shipping_status=order.shipping_status,
        tracking_number=order.tracking_number,
        estimated_delivery_date=order.estimated_delivery_date,
        payment_id=str(order.payment_id) if order.payment_id else None,
        transaction_id=order.transaction_id,
        paid_at=order.paid_at,
        delivered_at=order.delivered_at,
        cancelled_at=order.cancelled_at,
        cancellation_reason=order.cancellation_reason,
        refunded_at=order.refunded_at,
        created_at=order.created_at,
    )


def _payment_response(payment) -> PaymentResponse:
    return PaymentResponse(
        payment_id=str(payment.id),
        order_id=str(payment.order_id),
        amount=payment.amount,
        currency=payment.currency,
        payment_method=payment.payment_method,
        payment_status=payment.payment_status,
        payment_gateway=payment.payment_gateway,
        transaction_id=payment.transaction_id,
        payment_details=details_to_dict(payment),
        error_code=payment.error_code,
        paid_at=payment.paid_at,
        refund_amount=payment.refund_amount,
        refund_reason=payment.refund_reason,
        refund_date=payment.refund_date,
        created_at=payment.created_at,
    )


def _paginate(records, page, limit):
    """Newest first, then sliced to one page."""
    records = sorted(records, key=lambda r: r.created_at, reverse=True)
    total = len(records)
    start = (page - 1) * limit
    pagination = PaginationSchema(page=page, limit=limit, total=total, pages=math.ceil(total / limit) if total else 0)
    return records[start : start + limit], pagination


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(customer: CurrentCustomer) -> CartResponse:
    return _cart_response(get_or_create_cart(customer.id))


@cart_router.post("", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, customer: CurrentCustomer) -> CartResponse:
    command = AddToCart(
        customer_id=customer.id,
        product_id=body.product_id,
        quantity=body.quantity,
        lens_type=body.lens_type,
        lens_color=body.lens_color,
        power=_power_json(body.power),
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(get_or_create_cart(customer.id))


@cart_router.post("/validate", response_model=CartValidationResponse)
async def validate_cart(customer: CurrentCustomer) -> CartValidationResponse:
    result = current_domain.process(ValidateCart(customer_id=customer.id), asynchronous=False)
    return CartValidationResponse(**result)


@cart_router.put("/{item_id}", response_model=CartResponse)
async def update_cart_item(item_id: str, body: UpdateCartItemRequest, customer: CurrentCustomer) -> CartResponse:
    command = UpdateCartItem(
        customer_id=customer.id,
        item_id=item_id,
        quantity=body.quantity,
        lens_type=body.lens_type,
        lens_color=body.lens_color,
        power=_power_json(body.power),
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(get_or_create_cart(customer.id))


@cart_router.delete("/{item_id}", response_model=CartResponse)
async def remove_cart_item(item_id: str, customer: CurrentCustomer) -> CartResponse:
    current_domain.process(RemoveFromCart(customer_id=customer.id, item_id=item_id), asynchronous=False)
    return _cart_response(get_or_create_cart(customer.id))


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(customer: CurrentCustomer) -> CartResponse:
    current_domain.process(ClearCart(customer_id=customer.id), asynchronous=False)
    return _cart_response(get_or_create_cart(customer.id))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, customer: CurrentCustomer) -> OrderResponse:
    command = PlaceOrder(
        customer_id=customer.id,
        customer_email=customer.email,
        shipping_address=body.shipping_address.model_dump_json(),
        billing_address=body.billing_address.model_dump_json(),
        payment_method=body.payment_method,
        shipping_method=body.shipping_method,
        notes=body.notes,
        checkout_id=body.checkout_id,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get(order_id))


@order_router.get("", response_model=OrderListResponse)
async def list_my_orders(
    customer: CurrentCustomer,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> OrderListResponse:
    repo = current_domain.repository_for(Order)
    orders = repo._dao.query.filter(customer_id=customer.id).all().items
    page_items, pagination = _paginate(orders, page, limit)
    return OrderListResponse(orders=[_order_response(o) for o in page_items], pagination=pagination)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, customer: CurrentCustomer) -> OrderResponse:
    return _order_response(get_customer_order(order_id, customer.id))


@order_router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest, customer: CurrentCustomer) -> OrderResponse:
    command = CancelOrder(order_id=order_id, customer_id=customer.id, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get(order_id))


@order_router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest, admin: Admin) -> OrderResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        order_status=body.order_status,
        shipping_status=body.shipping_status,
        tracking_number=body.tracking_number,
        reason=body.reason,
    )
    current_domain.process(command, asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get(order_id))


@order_router.patch("/{order_id}/payment", response_model=OrderResponse)
async def update_payment_status(order_id: str, body: UpdatePaymentStatusRequest, admin: Admin) -> OrderResponse:
    command = UpdatePaymentStatus(order_id=order_id, payment_status=body.payment_status)
    current_domain.process(command, asynchronous=False)
    return _order_response(current_domain.repository_for(Order).get(order_id))


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("", response_model=PaymentWithOrderResponse)
async def process_payment(body: ProcessPaymentRequest, customer: CurrentCustomer) -> PaymentWithOrderResponse:
    payment = charge_order(
        order_id=body.order_id,
        customer_id=customer.id,
        payment_method=body.payment_method,
        payment_details=body.payment_details,
    )
    order = current_domain.repository_for(Order).get(payment.order_id)
    return PaymentWithOrderResponse(payment=_payment_response(payment), order=_order_response(order))


@payment_router.get("", response_model=PaymentListResponse)
async def list_my_payments(
    customer: CurrentCustomer,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> PaymentListResponse:
    repo = current_domain.repository_for(Payment)
    payments = repo._dao.query.filter(customer_id=customer.id).all().items
    page_items, pagination = _paginate(payments, page, limit)
    return PaymentListResponse(payments=[_payment_response(p) for p in page_items], pagination=pagination)


@payment_router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(payment_id: str, customer: CurrentCustomer) -> PaymentResponse:
    return _payment_response(get_customer_payment(payment_id, customer.id))


@payment_router.post("/{payment_id}/refund", response_model=PaymentWithOrderResponse)
async def request_refund(payment_id: str, body: RefundRequest, customer: CurrentCustomer) -> PaymentWithOrderResponse:
    command = RequestRefund(payment_id=payment_id, customer_id=customer.id, reason=body.reason)
    current_domain.process(command, asynchronous=False)

    payment = current_domain.repository_for(Payment).get(payment_id)
    order = current_domain.repository_for(Order).get(payment.order_id)
    return PaymentWithOrderResponse(payment=_payment_response(payment), order=_order_response(order))


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.get("/orders", response_model=OrderListResponse)
async def list_all_orders(
    admin: Admin,
    status: str | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> OrderListResponse:
    query = current_domain.repository_for(Order)._dao.query
    if status:
        query = query.filter(order_status=status)
    page_items, pagination = _paginate(query.all().items, page, limit)
    return OrderListResponse(orders=[_order_response(o) for o in page_items], pagination=pagination)


@admin_router.get("/payments", response_model=PaymentListResponse)
async def list_all_payments(
    admin: Admin,
    status: str | None = None,
    method: str | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> PaymentListResponse:
    filters = {}
    if status:
        filters["payment_status"] = status
    if method:
        filters["payment_method"] = method

    query = current_domain.repository_for(Payment)._dao.query
    if filters:
        query = query.filter(**filters)
    page_items, pagination = _paginate(query.all().items, page, limit)
    return PaymentListResponse(payments=[_payment_response(p) for p in page_items], pagination=pagination)


# ---------------------------------------------------------------------------
# Wishlist Router
# ---------------------------------------------------------------------------
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def _wishlist_response(customer_id) -> WishlistResponse:
    wishlists = current_domain.repository_for(Wishlist)._dao.query.filter(customer_id=customer_id).all().items
    product_ids = wishlists[0].product_ids if wishlists else []
    return WishlistResponse(customer_id=customer_id, product_ids=product_ids, product_count=len(product_ids))


@wishlist_router.get("", response_model=WishlistResponse)
async def get_wishlist(customer: CurrentCustomer) -> WishlistResponse:
    return _wishlist_response(customer.id)


@wishlist_router.get("/check/{product_id}", response_model=WishlistCheckResponse)
async def check_wishlist(product_id: str, customer: CurrentCustomer) -> WishlistCheckResponse:
    wishlists = current_domain.repository_for(Wishlist)._dao.query.filter(customer_id=customer.id).all().items
    in_wishlist = bool(wishlists) and wishlists[0].contains(product_id)
    return WishlistCheckResponse(product_id=product_id, in_wishlist=in_wishlist)


@wishlist_router.post("", response_model=WishlistResponse)
async def add_to_wishlist(body: AddToWishlistRequest, customer: CurrentCustomer) -> WishlistResponse:
    current_domain.process(AddToWishlist(customer_id=customer.id, product_id=body.product_id), asynchronous=False)
    return _wishlist_response(customer.id)


@wishlist_router.delete("/{product_id}", response_model=WishlistResponse)
async def remove_from_wishlist(product_id: str, customer: CurrentCustomer) -> WishlistResponse:
    current_domain.process(RemoveFromWishlist(customer_id=customer.id, product_id=product_id), asynchronous=False)
    return _wishlist_response(customer.id)


@wishlist_router.delete("", response_model=WishlistResponse)
async def clear_wishlist(customer: CurrentCustomer) -> WishlistResponse:
    current_domain.process(ClearWishlist(customer_id=customer.id), asynchronous=False)
    return _wishlist_response(customer.id)
