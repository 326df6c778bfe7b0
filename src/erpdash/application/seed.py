from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from erpdash.domain.ids import new_id
from erpdash.domain.models import Notification, Product, Sale, SaleItem, User
from erpdash.formatting import format_currency


@dataclass(frozen=True)
class SeedData:
    products: list[Product]
    sales: list[Sale]
    notifications: list[Notification]
    users: list[User]


# name, description, category, price, cost_price, quantity, threshold, image, created/updated window (days)
_PRODUCTS = [
    ("Laptop - ProBook 450", "High-performance laptop for professionals", "Electronics",
     58999.0, 45000.0, 15, 5, "https://images.pexels.com/photos/18105/pexels-photo.jpg", 60, 30),
    ("Office Chair - Ergonomic", "Comfortable ergonomic chair for office use", "Furniture",
     12999.0, 8500.0, 8, 3, "https://images.pexels.com/photos/1957477/pexels-photo-1957477.jpeg", 45, 20),
    ("Wireless Mouse", "Bluetooth wireless mouse with long battery life", "Accessories",
     1499.0, 800.0, 25, 10, "https://images.pexels.com/photos/5054776/pexels-photo-5054776.jpeg", 90, 15),
    ("Desk Lamp - LED", "Adjustable LED desk lamp with multiple brightness levels", "Lighting",
     2499.0, 1200.0, 18, 7, "https://images.pexels.com/photos/1112598/pexels-photo-1112598.jpeg", 75, 10),
    ("Notebook Set - Premium", "Set of 3 premium hardcover notebooks", "Stationery",
     899.0, 450.0, 30, 15, "https://images.pexels.com/photos/733857/pexels-photo-733857.jpeg", 50, 5),
    ("Laser Printer - Monochrome", "Fast and reliable monochrome laser printer", "Electronics",
     15999.0, 11000.0, 5, 2, "https://images.pexels.com/photos/6010432/pexels-photo-6010432.jpeg", 40, 3),
    ("External Hard Drive - 2TB", "Portable external hard drive with 2TB storage", "Storage",
     6999.0, 4500.0, 12, 4, "https://images.pexels.com/photos/117729/pexels-photo-117729.jpeg", 35, 8),
]

# [(product index, qty)], payment, customer, phone, window (days), notes
_SALES = [
    ([(0, 1), (2, 1)], "Credit Card", "Rahul Sharma", "9876543210", 25, "Business purchase"),
    ([(1, 2)], "UPI", "Priya Patel", "8765432109", 18, "Office setup"),
    ([(4, 5), (2, 3)], "Cash", "Amit Kumar", "7654321098", 15, "Bulk purchase for new staff"),
    ([(3, 2)], "Net Banking", "Neha Singh", "6543210987", 10, ""),
    ([(5, 1), (6, 2)], "Credit Card", "Rajesh Gupta", None, 5, "Office equipment upgrade"),
]

_USERS = [
    ("Admin User", "admin@example.com", "admin", "https://i.pravatar.cc/150?img=1"),
    ("Manager User", "manager@example.com", "manager", "https://i.pravatar.cc/150?img=2"),
    ("Employee User", "employee@example.com", "employee", "https://i.pravatar.cc/150?img=3"),
]


def build_seed_data(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> SeedData:
    """Sample records used the first time a collection is missing from storage."""
    now = now or datetime.now()
    rng = rng or random.Random()

    def days_back(window: int) -> datetime:
        return now - timedelta(days=rng.randrange(window))

    products = [
        Product(
            id=new_id(),
            name=name,
            description=desc,
            category=category,
            price=price,
            cost_price=cost,
            quantity=qty,
            threshold=threshold,
            image_url=image,
            created_at=days_back(created_window),
            updated_at=days_back(updated_window),
        )
        for name, desc, category, price, cost, qty, threshold, image, created_window, updated_window in _PRODUCTS
    ]

    sales = []
    for lines, payment, customer, phone, window, notes in _SALES:
        items = tuple(
            SaleItem(
                product_id=products[idx].id,
                product_name=products[idx].name,
                quantity=qty,
                unit_price=products[idx].price,
                total_price=products[idx].price * qty,
            )
            for idx, qty in lines
        )
        sales.append(
            Sale(
                id=new_id(),
                items=items,
                total_amount=sum(it.total_price for it in items),
                payment_method=payment,
                customer_name=customer,
                customer_phone=phone,
                date=days_back(window),
                notes=notes,
            )
        )

    printer = products[5]
    notifications = [
        Notification(
            id=new_id(),
            title="Low Stock Alert",
            message=f"{printer.name} is running low on stock ({printer.quantity} remaining)",
            type="warning",
            read=False,
            date=now,
        ),
        Notification(
            id=new_id(),
            title="New Sale Completed",
            message=f"Sale of {format_currency(sales[0].total_amount)} was completed successfully",
            type="success",
            read=True,
            date=days_back(2),
        ),
        Notification(
            id=new_id(),
            title="System Update",
            message="The system has been updated to the latest version",
            type="info",
            read=False,
            date=days_back(3),
        ),
    ]

    users = [User(id=new_id(), name=n, email=e, role=r, avatar=a) for n, e, r, a in _USERS]

    return SeedData(products=products, sales=sales, notifications=notifications, users=users)
