from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from erpdash.application.store import DomainStore
from erpdash.domain.errors import NotFoundError
from erpdash.domain.ids import new_id
from erpdash.domain.models import Product
from erpdash.services.drafts import ProductDraft

log = logging.getLogger(__name__)


class InventoryService:
    def __init__(self, store: DomainStore):
        self.store = store

    def list_products(self) -> list[Product]:
        return list(self.store.products)

    def get_product(self, product_id: str) -> Product:
        p = self.store.find_product(product_id)
        if not p:
            raise NotFoundError("Product not found.")
        return p

    def new_draft(self, product_id: Optional[str] = None) -> ProductDraft:
        if product_id is None:
            return ProductDraft()
        return ProductDraft.from_product(self.get_product(product_id))

    def add_product(
        self,
        name: str,
        description: str,
        category: str,
        price: float,
        cost_price: float,
        quantity: int,
        threshold: int,
        image_url: Optional[str] = None,
    ) -> Product:
        ProductDraft(
            name=name,
            description=description,
            category=category,
            price=price,
            cost_price=cost_price,
            quantity=quantity,
            threshold=threshold,
        ).validate()

        now = self.store.clock()
        product = Product(
            id=new_id(),
            name=name.strip(),
            description=(description or "").strip(),
            category=category.strip(),
            price=float(price),
            cost_price=float(cost_price),
            quantity=int(quantity),
            threshold=int(threshold),
            image_url=image_url or None,
            created_at=now,
            updated_at=now,
        )
        self.store.replace_products([*self.store.products, product])
        log.info("product_added product_id=%s name=%s", product.id, product.name)
        return product

    def update_product(self, product: Product) -> Product:
        ProductDraft.from_product(product).validate()
        if self.store.find_product(product.id) is None:
            raise NotFoundError("Product not found.")

        updated = replace(product, updated_at=self.store.clock())
        self.store.replace_products(updated if p.id == product.id else p for p in self.store.products)
        log.info("product_updated product_id=%s", product.id)
        return updated

    def delete_product(self, product_id: str) -> None:
        # Past sales keep their denormalized copy of the product.
        if self.store.find_product(product_id) is None:
            raise NotFoundError("Product not found.")
        self.store.replace_products(p for p in self.store.products if p.id != product_id)
        log.info("product_deleted product_id=%s", product_id)

    def low_stock_products(self) -> list[Product]:
        return sorted((p for p in self.store.products if p.is_low_stock), key=lambda p: p.quantity)

    def search_products(self, term: str) -> list[Product]:
        needle = (term or "").strip().lower()
        return [
            p for p in self.store.products
            if needle in p.name.lower() or needle in p.category.lower()
        ]

    def categories(self) -> list[str]:
        return list(dict.fromkeys(p.category for p in self.store.products))
