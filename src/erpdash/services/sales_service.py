from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from erpdash.application.store import DomainStore
from erpdash.domain.errors import NotFoundError
from erpdash.domain.ids import new_id
from erpdash.domain.models import Notification, Sale, SaleInput, SaleItem, SaleOutcome
from erpdash.services.drafts import SaleDraft

log = logging.getLogger("erpdash.sales")


def stock_alert(product_name: str, quantity: int, threshold: int, when: datetime) -> Optional[Notification]:
    """Alert for a quantity left after a sale, or None when stock is healthy."""
    if 0 < quantity <= threshold:
        return Notification(
            id=new_id(),
            title="Low Stock Alert",
            message=f"{product_name} is running low on stock ({quantity} remaining)",
            type="warning",
            read=False,
            date=when,
        )
    if quantity <= 0:
        return Notification(
            id=new_id(),
            title="Out of Stock Alert",
            message=f"{product_name} is now out of stock!",
            type="error",
            read=False,
            date=when,
        )
    return None


class SalesService:
    def __init__(self, store: DomainStore, strict_products: bool = False):
        self.store = store
        self.strict_products = strict_products

    def record_sale(self, sale_input: SaleInput) -> SaleOutcome:
        """Record a sale, take its quantities out of stock and raise stock alerts.

        The caller's ``total_amount`` is stored as given. Stock is reduced
        without a floor; lines are applied in order so repeated products
        decrement the running quantity. Lines naming an unknown product are
        skipped and reported in the outcome, unless the service is strict,
        in which case nothing is applied and NotFoundError is raised.
        """
        lines = list(sale_input.lines)

        if self.strict_products:
            missing = [ln.product_id for ln in lines if self.store.find_product(ln.product_id) is None]
            if missing:
                raise NotFoundError(f"Product not found: {', '.join(missing)}")

        now = self.store.clock()
        items = []
        for ln in lines:
            name = ln.product_name
            if name is None:
                product = self.store.find_product(ln.product_id)
                name = product.name if product else ""
            items.append(
                SaleItem(
                    product_id=ln.product_id,
                    product_name=name,
                    quantity=int(ln.quantity),
                    unit_price=float(ln.unit_price),
                    total_price=int(ln.quantity) * float(ln.unit_price),
                )
            )

        sale = Sale(
            id=new_id(),
            items=tuple(items),
            total_amount=float(sale_input.total_amount),
            payment_method=sale_input.payment_method,
            customer_name=sale_input.customer_name,
            customer_phone=sale_input.customer_phone,
            date=now,
            notes=sale_input.notes,
        )
        self.store.replace_sales([*self.store.sales, sale])

        products = list(self.store.products)
        position = {p.id: i for i, p in enumerate(products)}
        emitted: list[Notification] = []
        skipped: list[str] = []

        for item in items:
            idx = position.get(item.product_id)
            if idx is None:
                skipped.append(item.product_id)
                log.warning("sale_line_skipped sale_id=%s product_id=%s reason=not_found", sale.id, item.product_id)
                continue

            product = products[idx]
            new_quantity = product.quantity - item.quantity
            products[idx] = replace(product, quantity=new_quantity, updated_at=now)

            alert = stock_alert(product.name, new_quantity, product.threshold, now)
            if alert is not None:
                emitted.append(alert)

        if len(skipped) < len(items):
            self.store.replace_products(products)
        if emitted:
            # newest first
            self.store.replace_notifications([*reversed(emitted), *self.store.notifications])

        log.info(
            "sale_recorded sale_id=%s lines=%s total=%.2f alerts=%s skipped=%s",
            sale.id, len(items), sale.total_amount, len(emitted), len(skipped),
        )
        return SaleOutcome(sale=sale, notifications=tuple(emitted), skipped_product_ids=tuple(skipped))

    def list_sales(self) -> list[Sale]:
        return list(self.store.sales)

    def get_sale(self, sale_id: str) -> Sale:
        sale = next((s for s in self.store.sales if s.id == sale_id), None)
        if not sale:
            raise NotFoundError("Sale not found.")
        return sale

    def recent_sales(self, limit: int = 5) -> list[Sale]:
        return sorted(self.store.sales, key=lambda s: s.date, reverse=True)[:limit]

    def search_sales(self, term: str) -> list[Sale]:
        needle = (term or "").strip().lower()
        hits = [
            s for s in self.store.sales
            if not needle
            or needle in (s.customer_name or "").lower()
            or any(needle in it.product_name.lower() for it in s.items)
        ]
        return sorted(hits, key=lambda s: s.date, reverse=True)

    def new_draft(self) -> SaleDraft:
        return SaleDraft(self.store.products)
