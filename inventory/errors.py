"""Exceptions raised by the inventory store."""

from typing import Optional


class InventoryError(Exception):
    """Base class for all inventory store errors."""
    pass


class ValidationError(InventoryError):
    """Raised when product fields fail validation.

    Always raised before any mutation is attempted, so storage is untouched.
    """

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class NotFound(InventoryError):
    """Raised when a product id has no matching record."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class StorageFailure(InventoryError):
    """Raised when the storage engine fails an operation."""

    def __init__(self, operation: str, cause: Optional[Exception] = None):
        self.operation = operation
        self.cause = cause
        message = f"Storage failure during {operation}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class UnknownResource(InventoryError, ValueError):
    """Raised for a resource path the store cannot serve."""

    def __init__(self, path: str, operation: Optional[str] = None):
        self.path = path
        self.operation = operation
        if operation:
            super().__init__(f"{operation.capitalize()} is not supported for {path}")
        else:
            super().__init__(f"Unknown resource path {path}")
