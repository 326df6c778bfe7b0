from __future__ import annotations

import json
import logging
from typing import Callable, Iterable, Optional, TypeVar

from erpdash.domain.errors import StorageError
from erpdash.domain.models import Notification, Product, Sale, User
from erpdash.repositories.contracts import KeyValueStorage
from erpdash.repositories import serialization as codec

log = logging.getLogger("erpdash.storage")

T = TypeVar("T")

PRODUCTS_KEY = "erp_products"
SALES_KEY = "erp_sales"
NOTIFICATIONS_KEY = "erp_notifications"
USERS_KEY = "erp_users"
CURRENT_USER_KEY = "erp_currentUser"


class CollectionRepository:
    """Reads and writes whole domain collections under namespaced keys.

    Each save serializes the full collection as one ordered JSON array and
    overwrites the previous value. Nothing is diffed or appended.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def _load(self, key: str, decode: Callable[[dict], T]) -> Optional[list[T]]:
        raw = self.storage.get(key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return [decode(item) for item in data]
        except (ValueError, KeyError, TypeError) as exc:
            raise StorageError(f"Stored collection '{key}' is corrupt: {exc}") from exc

    def _save(self, key: str, items: Iterable[T], encode: Callable[[T], dict]) -> None:
        payload = [encode(it) for it in items]
        self.storage.set(key, json.dumps(payload, ensure_ascii=False))
        log.info("collection_saved key=%s count=%s", key, len(payload))

    # ---------- Products ----------
    def load_products(self) -> Optional[list[Product]]:
        return self._load(PRODUCTS_KEY, codec.product_from_dict)

    def save_products(self, products: Iterable[Product]) -> None:
        self._save(PRODUCTS_KEY, products, codec.product_to_dict)

    # ---------- Sales ----------
    def load_sales(self) -> Optional[list[Sale]]:
        return self._load(SALES_KEY, codec.sale_from_dict)

    def save_sales(self, sales: Iterable[Sale]) -> None:
        self._save(SALES_KEY, sales, codec.sale_to_dict)

    # ---------- Notifications ----------
    def load_notifications(self) -> Optional[list[Notification]]:
        return self._load(NOTIFICATIONS_KEY, codec.notification_from_dict)

    def save_notifications(self, notifications: Iterable[Notification]) -> None:
        self._save(NOTIFICATIONS_KEY, notifications, codec.notification_to_dict)

    # ---------- Users ----------
    def load_users(self) -> Optional[list[User]]:
        return self._load(USERS_KEY, codec.user_from_dict)

    def save_users(self, users: Iterable[User]) -> None:
        self._save(USERS_KEY, users, codec.user_to_dict)

    # ---------- Session ----------
    def load_current_user(self) -> Optional[User]:
        raw = self.storage.get(CURRENT_USER_KEY)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
            if not isinstance(data, dict) or not data.get("id"):
                return None
            return codec.user_from_dict(data)
        except (ValueError, KeyError, TypeError) as exc:
            raise StorageError(f"Stored session user is corrupt: {exc}") from exc

    def save_current_user(self, user: User) -> None:
        self.storage.set(CURRENT_USER_KEY, json.dumps(codec.user_to_dict(user), ensure_ascii=False))

    def clear_current_user(self) -> None:
        self.storage.delete(CURRENT_USER_KEY)
