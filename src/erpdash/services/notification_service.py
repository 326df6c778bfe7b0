from __future__ import annotations

import logging
from dataclasses import replace

from erpdash.application.store import DomainStore
from erpdash.domain.models import Notification

log = logging.getLogger(__name__)

STOCK_ALERT_PREFIX = "stock_"


class NotificationService:
    def __init__(self, store: DomainStore):
        self.store = store

    def list_notifications(self) -> list[Notification]:
        return list(self.store.notifications)

    def unread_count(self) -> int:
        return sum(1 for n in self.store.notifications if not n.read)

    def mark_as_read(self, notification_id: str) -> bool:
        if not any(n.id == notification_id for n in self.store.notifications):
            return False
        self.store.replace_notifications(
            replace(n, read=True) if n.id == notification_id else n for n in self.store.notifications
        )
        return True

    def clear_all(self) -> None:
        self.store.replace_notifications([])
        log.info("notifications_cleared")

    def feed(self) -> list[Notification]:
        """Stored notifications plus a live alert per low-stock product, newest first.

        Live alerts are derived on every call and never persisted.
        """
        now = self.store.clock()
        live = [
            Notification(
                id=f"{STOCK_ALERT_PREFIX}{p.id}",
                title="Low Stock Alert",
                message=f"{p.name} is running low on stock ({p.quantity} remaining)",
                type="error" if p.quantity == 0 else "warning",
                read=False,
                date=now,
            )
            for p in self.store.products
            if p.is_low_stock
        ]
        return sorted([*live, *self.store.notifications], key=lambda n: n.date, reverse=True)
