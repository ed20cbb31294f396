"""Request identity for the ordering API.

Authentication happens upstream; the gateway forwards the verified customer
as headers. Routes depend on ``current_customer`` and admin-only routes on
``require_admin``.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException

from catalogue.utils.logging import add_context

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Customer:
    id: str
    email: str | None = None
    role: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def current_customer(
    x_customer_id: Annotated[str | None, Header()] = None,
    x_customer_email: Annotated[str | None, Header()] = None,
    x_customer_role: Annotated[str | None, Header()] = None,
) -> Customer:
    if not x_customer_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    add_context(customer_id=x_customer_id)
    return Customer(id=x_customer_id, email=x_customer_email, role=x_customer_role)


def require_admin(customer: Annotated[Customer, Depends(current_customer)]) -> Customer:
    if not customer.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return customer
