"""Local form state that only reaches the domain store on ``commit``.

A draft is validated on its own; nothing it holds is visible to other
services until ``commit`` hands it to the owning service.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from erpdash.domain.errors import ValidationError
from erpdash.domain.models import (
    PAYMENT_METHODS,
    USER_ROLES,
    Product,
    SaleInput,
    SaleItem,
    SaleLineInput,
    SaleOutcome,
    User,
)
from erpdash.services.auth_service import require_action

_PHONE_RE = re.compile(r"^\d{10}$")


def _raise_if_any(errors: dict[str, str]) -> None:
    if errors:
        first = next(iter(errors.values()))
        raise ValidationError(first, errors)


@dataclass
class ProductDraft:
    name: str = ""
    description: str = ""
    category: str = ""
    price: float = 0.0
    cost_price: float = 0.0
    quantity: int = 0
    threshold: int = 5
    image_url: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_product(cls, product: Product) -> "ProductDraft":
        return cls(
            name=product.name,
            description=product.description,
            category=product.category,
            price=product.price,
            cost_price=product.cost_price,
            quantity=product.quantity,
            threshold=product.threshold,
            image_url=product.image_url,
            id=product.id,
        )

    def validate(self) -> None:
        errors: dict[str, str] = {}
        if not (self.name or "").strip():
            errors["name"] = "Product name is required"
        if not (self.category or "").strip():
            errors["category"] = "Category is required"
        if self.price <= 0:
            errors["price"] = "Price must be greater than 0"
        if self.cost_price < 0:
            errors["cost_price"] = "Cost price cannot be negative"
        if self.quantity < 0:
            errors["quantity"] = "Quantity cannot be negative"
        if self.threshold < 0:
            errors["threshold"] = "Threshold cannot be negative"
        _raise_if_any(errors)

    def commit(self, inventory) -> Product:
        self.validate()
        if self.id is None:
            return inventory.add_product(
                name=self.name,
                description=self.description,
                category=self.category,
                price=self.price,
                cost_price=self.cost_price,
                quantity=self.quantity,
                threshold=self.threshold,
                image_url=self.image_url,
            )
        current = inventory.get_product(self.id)
        return inventory.update_product(
            Product(
                id=current.id,
                name=self.name.strip(),
                description=self.description,
                category=self.category.strip(),
                price=float(self.price),
                cost_price=float(self.cost_price),
                quantity=int(self.quantity),
                threshold=int(self.threshold),
                image_url=self.image_url or None,
                created_at=current.created_at,
                updated_at=current.updated_at,
            )
        )


class SaleDraft:
    """Cart being assembled at the point of sale.

    Quantities are clamped to the stock of the product snapshot the draft
    was opened with, so a committed draft never asks for more than that.
    """

    def __init__(self, products: Iterable[Product]):
        self._catalog: dict[str, Product] = {p.id: p for p in products}
        self.lines: list[SaleItem] = []
        self.payment_method = "Cash"
        self.customer_name = ""
        self.customer_phone = ""
        self.notes = ""

    @property
    def total_amount(self) -> float:
        return sum(it.total_price for it in self.lines)

    def _line_for(self, product: Product, quantity: int = 1) -> SaleItem:
        return SaleItem(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=product.price,
            total_price=quantity * product.price,
        )

    def add_line(self, product_id: Optional[str] = None) -> bool:
        taken = {it.product_id for it in self.lines}
        if product_id is None:
            available = [p for p in self._catalog.values() if p.quantity > 0 and p.id not in taken]
            if not available:
                return False
            product = available[0]
        else:
            product = self._catalog.get(product_id)
            if product is None or product.quantity <= 0 or product.id in taken:
                return False
        self.lines.append(self._line_for(product))
        return True

    def set_product(self, index: int, product_id: str) -> bool:
        taken = {it.product_id for i, it in enumerate(self.lines) if i != index}
        product = self._catalog.get(product_id)
        if product is None or product.quantity <= 0 or product.id in taken:
            return False
        self.lines[index] = self._line_for(product)
        return True

    def set_quantity(self, index: int, quantity: int) -> None:
        item = self.lines[index]
        product = self._catalog.get(item.product_id)
        if product is None:
            return
        valid = min(max(1, int(quantity)), product.quantity)
        self.lines[index] = SaleItem(
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=valid,
            unit_price=item.unit_price,
            total_price=valid * item.unit_price,
        )

    def remove_line(self, index: int) -> None:
        del self.lines[index]

    def validate(self) -> None:
        errors: dict[str, str] = {}
        if not self.lines:
            errors["products"] = "At least one product must be selected"
        elif any(it.quantity < 1 for it in self.lines):
            errors["products"] = "Every product line needs a quantity of at least 1"
        phone = (self.customer_phone or "").strip()
        if phone and not _PHONE_RE.match(phone):
            errors["customer_phone"] = "Phone number must be 10 digits"
        if self.payment_method not in PAYMENT_METHODS:
            errors["payment_method"] = f"Unknown payment method '{self.payment_method}'"
        _raise_if_any(errors)

    def to_input(self) -> SaleInput:
        return SaleInput(
            lines=tuple(
                SaleLineInput(
                    product_id=it.product_id,
                    quantity=it.quantity,
                    unit_price=it.unit_price,
                    product_name=it.product_name,
                )
                for it in self.lines
            ),
            total_amount=self.total_amount,
            payment_method=self.payment_method,
            customer_name=(self.customer_name or "").strip() or None,
            customer_phone=(self.customer_phone or "").strip() or None,
            notes=(self.notes or "").strip() or None,
        )

    def commit(self, sales) -> SaleOutcome:
        self.validate()
        return sales.record_sale(self.to_input())


@dataclass
class UserDraft:
    name: str = ""
    email: str = ""
    role: str = "employee"
    avatar: Optional[str] = None

    def validate(self, existing_users: Iterable[User] = (), actor: Optional[User] = None) -> None:
        name = (self.name or "").strip()
        email = (self.email or "").strip()
        if not name or not email:
            raise ValidationError("Name and email are required", {"name": "Name and email are required"})
        if any(u.email.strip().lower() == email.lower() for u in existing_users):
            raise ValidationError("Email already exists", {"email": "Email already exists"})
        if self.role not in USER_ROLES:
            raise ValidationError(f"Unknown role '{self.role}'", {"role": f"Unknown role '{self.role}'"})
        if self.role == "admin" and (actor is None or actor.role != "admin"):
            raise ValidationError("Only an admin can create admin users", {"role": "Only an admin can create admin users"})

    def commit(self, users, actor: Optional[User] = None) -> User:
        require_action(actor, "manage_users")
        self.validate(users.list_users(), actor)
        return users.add_user(self.name.strip(), self.email.strip(), self.role, self.avatar or None)
