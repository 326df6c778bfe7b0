from .models import (
    Product,
    Sale,
    SaleItem,
    Notification,
    User,
    SaleLineInput,
    SaleInput,
    SaleOutcome,
)
from .errors import ValidationError, NotFoundError, AuthorizationError, StorageError
from .ids import new_id

__all__ = [
    "Product",
    "Sale",
    "SaleItem",
    "Notification",
    "User",
    "SaleLineInput",
    "SaleInput",
    "SaleOutcome",
    "ValidationError",
    "NotFoundError",
    "AuthorizationError",
    "StorageError",
    "new_id",
]
