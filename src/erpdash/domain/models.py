from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

NOTIFICATION_TYPES = ("info", "warning", "error", "success")
USER_ROLES = ("admin", "manager", "employee")
PAYMENT_METHODS = ("Cash", "Credit Card", "Debit Card", "UPI", "Net Banking")


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    description: str
    category: str
    price: float
    cost_price: float
    quantity: int
    threshold: int
    created_at: datetime
    updated_at: datetime
    image_url: Optional[str] = None

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.threshold


@dataclass(frozen=True)
class SaleItem:
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    total_price: float


@dataclass(frozen=True)
class Sale:
    id: str
    items: tuple[SaleItem, ...]
    total_amount: float
    payment_method: str
    date: datetime
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Notification:
    id: str
    title: str
    message: str
    type: str
    read: bool
    date: datetime


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    role: str
    avatar: Optional[str] = None


@dataclass(frozen=True)
class SaleLineInput:
    product_id: str
    quantity: int
    unit_price: float
    product_name: Optional[str] = None

    @property
    def total_price(self) -> float:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class SaleInput:
    lines: tuple[SaleLineInput, ...]
    total_amount: float
    payment_method: str = "Cash"
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class SaleOutcome:
    sale: Sale
    notifications: tuple[Notification, ...] = ()
    skipped_product_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class TopProduct:
    product_id: str
    product_name: str
    quantity: int
    revenue: float


@dataclass(frozen=True)
class DailySales:
    date: str
    sales: int
    revenue: float


@dataclass(frozen=True)
class SalesReport:
    start: datetime
    end: datetime
    total_sales: int
    total_revenue: float
    total_profit: float
    profit_margin: float
    average_order_value: float
    top_products: list[TopProduct] = field(default_factory=list)
    sales_by_day: list[DailySales] = field(default_factory=list)
    category: Optional[str] = None


@dataclass(frozen=True)
class DashboardSummary:
    total_revenue: float
    total_sales: int
    total_products: int
    low_stock_count: int
    recent_sales: list[Sale]
    low_stock_products: list[Product]
