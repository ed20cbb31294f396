"""Method-specific payment details.

Each payment method carries exactly one kind of details: cards keep only
the last four digits of the number, UPI keeps the virtual payment address
and net banking keeps the bank, IFSC code and the tail of the account.
"""

import re

from protean.exceptions import ValidationError
from protean.fields import String

from ordering.domain import ordering

CARD_TYPES = ("visa", "mastercard", "amex", "discover")

_CARD_NUMBER = re.compile(r"^\d{16}$")
_EXPIRY = re.compile(r"^(0[1-9]|1[0-2])/\d{2}$")
_UPI_ID = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+$")
_ACCOUNT_NUMBER = re.compile(r"^\d{9,18}$")
_IFSC = re.compile(r"^[A-Z]{4}0[A-Z0-9]{6}$")


@ordering.value_object(part_of="Payment")
class CardDetails:
    card_type = String(required=True, max_length=20)
    last4 = String(required=True, max_length=4)
    card_holder_name = String(required=True, max_length=100)
    expiry_date = String(required=True, max_length=5)


@ordering.value_object(part_of="Payment")
class UpiDetails:
    upi_id = String(required=True, max_length=100)


@ordering.value_object(part_of="Payment")
class BankDetails:
    bank_name = String(required=True, max_length=100)
    account_last4 = String(required=True, max_length=4)
    ifsc_code = String(required=True, max_length=11)


def _card_details(data):
    errors = {}
    number = re.sub(r"[\s-]", "", str(data.get("card_number") or ""))
    if not _CARD_NUMBER.match(number):
        errors["card_number"] = ["Invalid card number"]

    card_type = str(data.get("card_type") or "").lower()
    if card_type not in CARD_TYPES:
        errors["card_type"] = ["Invalid card type"]

    holder = str(data.get("card_holder_name") or "").strip()
    if len(holder) < 3:
        errors["card_holder_name"] = ["Card holder name is required for card payments"]

    expiry = str(data.get("expiry_date") or "")
    if not _EXPIRY.match(expiry):
        errors["expiry_date"] = ["Expiry date must be in MM/YY format"]

    if errors:
        raise ValidationError(errors)

    return CardDetails(card_type=card_type, last4=number[-4:], card_holder_name=holder, expiry_date=expiry)


def _upi_details(data):
    upi_id = str(data.get("upi_id") or "")
    if not _UPI_ID.match(upi_id):
        raise ValidationError({"upi_id": ["Invalid UPI ID"]})
    return UpiDetails(upi_id=upi_id)


def _bank_details(data):
    errors = {}
    bank_name = str(data.get("bank_name") or "").strip()
    if len(bank_name) < 2:
        errors["bank_name"] = ["Bank name is required for net banking"]

    account_number = str(data.get("account_number") or "")
    if not _ACCOUNT_NUMBER.match(account_number):
        errors["account_number"] = ["Invalid account number"]

    ifsc_code = str(data.get("ifsc_code") or "")
    if not _IFSC.match(ifsc_code):
        errors["ifsc_code"] = ["Invalid IFSC code"]

    if errors:
        raise ValidationError(errors)

    return BankDetails(bank_name=bank_name, account_last4=account_number[-4:], ifsc_code=ifsc_code)


_PARSERS = {
    "credit_card": _card_details,
    "debit_card": _card_details,
    "upi": _upi_details,
    "net_banking": _bank_details,
}


def parse_payment_details(payment_method, data):
    """Validate raw details for ``payment_method`` and return the matching value object."""
    parser = _PARSERS.get(payment_method)
    if parser is None:
        raise ValidationError({"payment_method": [f"Unsupported payment method '{payment_method}'"]})
    return parser(data or {})


def details_to_dict(payment):
    """Stored details of a payment as a plain dict, for API responses."""
    if payment.card_details:
        d = payment.card_details
        return {
            "card_type": d.card_type,
            "last4": d.last4,
            "card_holder_name": d.card_holder_name,
            "expiry_date": d.expiry_date,
        }
    if payment.upi_details:
        return {"upi_id": payment.upi_details.upi_id}
    if payment.bank_details:
        d = payment.bank_details
        return {"bank_name": d.bank_name, "account_last4": d.account_last4, "ifsc_code": d.ifsc_code}
    return {}
