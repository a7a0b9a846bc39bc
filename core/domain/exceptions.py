"""
Domain exceptions for the order pipeline.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from typing import Optional


class OrderError(Exception):
    """Base class for every order pipeline failure."""


# =============================================================================
# VALIDATION (rejected before any write)
# =============================================================================

class OrderValidationError(OrderError, ValueError):
    """Request is invalid; nothing was written."""


class EmptyCartError(OrderValidationError):
    def __init__(self):
        super().__init__("Cart is empty: at least one order line is required")


class UnknownCustomerError(OrderValidationError):
    def __init__(self, customer_id: Optional[str]):
        self.customer_id = customer_id
        if customer_id:
            message = f"Unknown customer: {customer_id}"
        else:
            message = "Customer id is required"
        super().__init__(message)


class TotalMismatchError(OrderValidationError):
    def __init__(self, supplied, expected):
        self.supplied = supplied
        self.expected = expected
        super().__init__(
            f"Order total {supplied} does not match computed total {expected}"
        )


# =============================================================================
# ALLOCATION / PERSISTENCE
# =============================================================================

class DuplicateOrderCodeError(OrderError):
    """Insert hit the order code unique constraint. Consumed by the retry loop."""

    def __init__(self, order_code: str):
        self.order_code = order_code
        super().__init__(f"Order code already taken: {order_code}")


class OrderCodeExhaustedError(OrderError):
    """Every allocation attempt collided; the caller should retry later."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            f"Could not allocate order code after {attempts} attempts"
        )


class PersistenceError(OrderError):
    """Record store failure (anything other than a code collision)."""


class CollaboratorTimeoutError(PersistenceError):
    def __init__(self, operation: str, timeout: float):
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"{operation} timed out after {timeout}s")


# =============================================================================
# OPERATOR UPDATES
# =============================================================================

class OrderNotFoundError(OrderError):
    def __init__(self, order_ref):
        self.order_ref = order_ref
        super().__init__(f"Order not found: {order_ref}")


class InvalidStatusTransitionError(OrderError):
    def __init__(self, current, target, reason: Optional[str] = None):
        self.current = current
        self.target = target
        message = f"Cannot move order from '{current}' to '{target}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


# =============================================================================
# BEST-EFFORT SIDE EFFECTS
# =============================================================================

class InsufficientStockError(OrderError):
    def __init__(self, product_id: int, requested: int):
        self.product_id = product_id
        self.requested = requested
        super().__init__(
            f"Insufficient stock for product {product_id} (requested {requested})"
        )
