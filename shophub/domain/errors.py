# shophub/domain/errors.py
"""
Bledy domenowe. Serwisy rzucaja je niezaleznie od HTTP,
mapowanie na status/kod robi shophub.api.errors.
"""
from typing import Any, List, Optional


class ShopError(Exception):
    code = "error"
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(ShopError):
    code = "not_found"
    status_code = 404
    default_message = "Resource not found"


class InsufficientStock(ShopError):
    code = "insufficient_stock"
    status_code = 400

    def __init__(self, product_name: str, available: int, message: Optional[str] = None):
        self.product_name = product_name
        self.available = available
        super().__init__(
            message or f"Insufficient stock for {product_name}. Only {available} items available."
        )


class EmptyCart(ShopError):
    code = "empty_cart"
    status_code = 400
    default_message = "Cart is empty. Cannot process checkout."


class InvalidState(ShopError):
    code = "invalid_state"
    status_code = 400
    default_message = "Operation not allowed in the current state"


class ValidationFailed(ShopError):
    code = "validation_failed"
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[dict[str, Any]]] = None):
        self.errors = errors or []
        super().__init__(message)


class Unauthorized(ShopError):
    code = "unauthorized"
    status_code = 401
    default_message = "Authentication required"


class Conflict(ShopError):
    code = "conflict"
    status_code = 409
    default_message = "Resource already exists"


class Internal(ShopError):
    code = "internal_error"
    status_code = 500
    default_message = "Internal server error"


class ServiceUnavailable(ShopError):
    code = "service_unavailable"
    status_code = 503
    default_message = "Service Unhealthy"
