"""Configurable fake payment gateway for development and testing.

Simulates a payment provider without any external calls. Outcomes are
decided by configuration, never by chance, so tests can force approvals
and declines.
"""

from itertools import count

from ordering.gateway.port import ChargeResult, PaymentGateway, RefundResult


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    name = "fake"

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.error_code: str = "card_declined"
        self.calls: list[dict] = []
        self._sequence = count(1)

    def configure(
        self,
        should_succeed: bool,
        failure_reason: str = "Card declined",
        error_code: str = "card_declined",
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.error_code = error_code

    def create_charge(
        self,
        amount: float,
        currency: str,
        payment_method_type: str,
        last4: str | None,
        idempotency_key: str,
    ) -> ChargeResult:
        call = {
            "method": "create_charge",
            "amount": amount,
            "currency": currency,
            "payment_method_type": payment_method_type,
            "last4": last4,
            "idempotency_key": idempotency_key,
        }
        self.calls.append(call)

        if self.should_succeed:
            return ChargeResult(
                success=True,
                gateway_transaction_id=f"fake_txn_{next(self._sequence):06d}",
                gateway_status="succeeded",
            )
        return ChargeResult(
            success=False,
            gateway_status="failed",
            error_code=self.error_code,
            failure_reason=self.failure_reason,
        )

    def create_refund(
        self,
        gateway_transaction_id: str,
        amount: float,
        reason: str,
    ) -> RefundResult:
        call = {
            "method": "create_refund",
            "gateway_transaction_id": gateway_transaction_id,
            "amount": amount,
            "reason": reason,
        }
        self.calls.append(call)

        if self.should_succeed:
            return RefundResult(
                success=True,
                gateway_refund_id=f"fake_ref_{next(self._sequence):06d}",
                gateway_status="succeeded",
            )
        return RefundResult(
            success=False,
            gateway_status="failed",
            failure_reason=self.failure_reason,
        )
