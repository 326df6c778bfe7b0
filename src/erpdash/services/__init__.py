from .inventory_service import InventoryService
from .sales_service import SalesService
from .notification_service import NotificationService
from .user_service import UserService
from .auth_service import AuthService
from .reporting_service import ReportingService

__all__ = [
    "InventoryService",
    "SalesService",
    "NotificationService",
    "UserService",
    "AuthService",
    "ReportingService",
]
