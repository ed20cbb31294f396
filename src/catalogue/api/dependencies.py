"""Admin guard for catalogue write endpoints.

The upstream gateway forwards the verified caller as ``X-Customer-Id`` and
``X-Customer-Role`` headers.
"""

from typing import Annotated

from fastapi import Header, HTTPException

from catalogue.utils.logging import add_context

ADMIN_ROLE = "admin"


def require_admin(
    x_customer_id: Annotated[str | None, Header()] = None,
    x_customer_role: Annotated[str | None, Header()] = None,
) -> str:
    if not x_customer_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    if x_customer_role != ADMIN_ROLE:
        raise HTTPException(status_code=403, detail="Admin access required")

    add_context(customer_id=x_customer_id)
    return x_customer_id
