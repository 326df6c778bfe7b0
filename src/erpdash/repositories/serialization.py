from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from erpdash.domain.models import Notification, Product, Sale, SaleItem, User


def _dt(value: datetime) -> str:
    return value.isoformat()


def _parse_dt(value: Any) -> datetime:
    return datetime.fromisoformat(str(value))


def _opt_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def product_to_dict(p: Product) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "description": p.description,
        "category": p.category,
        "price": p.price,
        "cost_price": p.cost_price,
        "quantity": p.quantity,
        "threshold": p.threshold,
        "image_url": p.image_url,
        "created_at": _dt(p.created_at),
        "updated_at": _dt(p.updated_at),
    }


def product_from_dict(d: dict) -> Product:
    return Product(
        id=str(d["id"]),
        name=str(d["name"]),
        description=str(d.get("description") or ""),
        category=str(d.get("category") or ""),
        price=float(d["price"]),
        cost_price=float(d.get("cost_price", 0.0)),
        quantity=int(d["quantity"]),
        threshold=int(d.get("threshold", 0)),
        image_url=_opt_str(d.get("image_url")),
        created_at=_parse_dt(d["created_at"]),
        updated_at=_parse_dt(d["updated_at"]),
    )


def sale_item_to_dict(it: SaleItem) -> dict:
    return {
        "product_id": it.product_id,
        "product_name": it.product_name,
        "quantity": it.quantity,
        "unit_price": it.unit_price,
        "total_price": it.total_price,
    }


def sale_item_from_dict(d: dict) -> SaleItem:
    return SaleItem(
        product_id=str(d["product_id"]),
        product_name=str(d["product_name"]),
        quantity=int(d["quantity"]),
        unit_price=float(d["unit_price"]),
        total_price=float(d["total_price"]),
    )


def sale_to_dict(s: Sale) -> dict:
    return {
        "id": s.id,
        "items": [sale_item_to_dict(it) for it in s.items],
        "total_amount": s.total_amount,
        "payment_method": s.payment_method,
        "customer_name": s.customer_name,
        "customer_phone": s.customer_phone,
        "date": _dt(s.date),
        "notes": s.notes,
    }


def sale_from_dict(d: dict) -> Sale:
    return Sale(
        id=str(d["id"]),
        items=tuple(sale_item_from_dict(it) for it in d.get("items", [])),
        total_amount=float(d["total_amount"]),
        payment_method=str(d.get("payment_method") or ""),
        customer_name=_opt_str(d.get("customer_name")),
        customer_phone=_opt_str(d.get("customer_phone")),
        date=_parse_dt(d["date"]),
        notes=_opt_str(d.get("notes")),
    )


def notification_to_dict(n: Notification) -> dict:
    return {
        "id": n.id,
        "title": n.title,
        "message": n.message,
        "type": n.type,
        "read": n.read,
        "date": _dt(n.date),
    }


def notification_from_dict(d: dict) -> Notification:
    return Notification(
        id=str(d["id"]),
        title=str(d["title"]),
        message=str(d["message"]),
        type=str(d["type"]),
        read=bool(d.get("read", False)),
        date=_parse_dt(d["date"]),
    )


def user_to_dict(u: User) -> dict:
    return {
        "id": u.id,
        "name": u.name,
        "email": u.email,
        "role": u.role,
        "avatar": u.avatar,
    }


def user_from_dict(d: dict) -> User:
    return User(
        id=str(d["id"]),
        name=str(d["name"]),
        email=str(d["email"]),
        role=str(d["role"]),
        avatar=_opt_str(d.get("avatar")),
    )
