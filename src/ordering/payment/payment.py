"""Payment aggregate: one attempt to charge an order through the gateway.

A failed attempt stays on record; the customer retries with a new Payment.
"""

import secrets
import time
from datetime import datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text, ValueObject

from ordering.domain import ordering
from ordering.order.order import PaymentMethod, PaymentStatus
from ordering.payment.details import BankDetails, CardDetails, UpiDetails
from ordering.payment.events import PaymentCompleted, PaymentFailed, PaymentRefunded

_DETAILS_FIELD_FOR_METHOD = {
    PaymentMethod.CREDIT_CARD.value: "card_details",
    PaymentMethod.DEBIT_CARD.value: "card_details",
    PaymentMethod.UPI.value: "upi_details",
    PaymentMethod.NET_BANKING.value: "bank_details",
}

_DETAILS_FIELD_FOR_TYPE = {
    CardDetails: "card_details",
    UpiDetails: "upi_details",
    BankDetails: "bank_details",
}


def generate_transaction_id():
    """``TXN`` + epoch milliseconds + 10 random upper-case hex characters."""
    return f"TXN{int(time.time() * 1000)}{secrets.token_hex(5).upper()}"


@ordering.aggregate
class Payment:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    amount = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="USD")
    payment_method = String(choices=PaymentMethod, required=True)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    payment_gateway = String(max_length=50)
    transaction_id = String(required=True, unique=True, max_length=40)
    gateway_transaction_id = String(max_length=100)

    card_details = ValueObject(CardDetails)
    upi_details = ValueObject(UpiDetails)
    bank_details = ValueObject(BankDetails)

    error_code = String(max_length=50)
    error_message = Text()
    paid_at = DateTime()
    refund_amount = Float(min_value=0.0)
    refund_reason = Text()
    refund_date = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def details_must_match_payment_method(self):
        expected = _DETAILS_FIELD_FOR_METHOD.get(self.payment_method)
        present = [name for name in ("card_details", "upi_details", "bank_details") if getattr(self, name)]
        if present != [expected]:
            raise ValidationError({"payment_details": [f"Payment details do not match method '{self.payment_method}'"]})

    @invariant.post
    def refund_fields_only_on_refund(self):
        if self.payment_status != PaymentStatus.REFUNDED.value and (self.refund_amount or self.refund_date):
            raise ValidationError({"refund_amount": ["Refund details can only be set on a refunded payment"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def initiate(cls, order, payment_method, details, payment_gateway):
        """Open a pending payment for the full order total."""
        now = datetime.now()
        return cls(
            order_id=order.id,
            customer_id=order.customer_id,
            amount=order.total,
            currency=order.currency or "USD",
            payment_method=payment_method,
            payment_status=PaymentStatus.PENDING.value,
            payment_gateway=payment_gateway,
            transaction_id=generate_transaction_id(),
            created_at=now,
            updated_at=now,
            **{_DETAILS_FIELD_FOR_TYPE[type(details)]: details},
        )

    @property
    def last4(self):
        if self.card_details:
            return self.card_details.last4
        if self.bank_details:
            return self.bank_details.account_last4
        return None

    def is_owned_by(self, customer_id):
        return str(self.customer_id) == str(customer_id)

    # -------------------------------------------------------------------
    # Gateway outcomes
    # -------------------------------------------------------------------
    def complete(self, gateway_transaction_id):
        if PaymentStatus(self.payment_status) != PaymentStatus.PENDING:
            raise ValidationError({"payment_status": ["Only pending payments can be completed"]})

        now = datetime.now()
        self.payment_status = PaymentStatus.COMPLETED.value
        self.gateway_transaction_id = gateway_transaction_id
        self.paid_at = now
        self.updated_at = now

        self.raise_(
            PaymentCompleted(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                customer_id=str(self.customer_id),
                amount=self.amount,
                currency=self.currency,
                transaction_id=self.transaction_id,
                paid_at=now,
            )
        )

    def fail(self, error_code, error_message):
        if PaymentStatus(self.payment_status) != PaymentStatus.PENDING:
            raise ValidationError({"payment_status": ["Only pending payments can fail"]})

        self.payment_status = PaymentStatus.FAILED.value
        self.error_code = error_code or "PAYMENT_FAILED"
        self.error_message = error_message
        self.updated_at = datetime.now()

        self.raise_(
            PaymentFailed(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                customer_id=str(self.customer_id),
                error_code=self.error_code,
                error_message=error_message,
            )
        )

    def refund(self, reason=None):
        """Refund the full amount of a completed payment."""
        if PaymentStatus(self.payment_status) != PaymentStatus.COMPLETED:
            raise ValidationError({"payment_status": ["Only completed payments can be refunded"]})

        now = datetime.now()
        with atomic_change(self):
            self.payment_status = PaymentStatus.REFUNDED.value
            self.refund_amount = self.amount
            self.refund_reason = reason
            self.refund_date = now
            self.updated_at = now

        self.raise_(
            PaymentRefunded(
                payment_id=str(self.id),
                order_id=str(self.order_id),
                customer_id=str(self.customer_id),
                refund_amount=self.refund_amount,
                reason=reason,
                refunded_at=now,
            )
        )
