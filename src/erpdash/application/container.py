from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from erpdash.application.store import DomainStore
from erpdash.repositories.collection_repo import CollectionRepository
from erpdash.repositories.kv_storage import SqliteKeyValueStorage
from erpdash.services.auth_service import AuthService
from erpdash.services.inventory_service import InventoryService
from erpdash.services.notification_service import NotificationService
from erpdash.services.reporting_service import ReportingService
from erpdash.services.sales_service import SalesService
from erpdash.services.user_service import UserService


@dataclass(frozen=True)
class AppContainer:
    storage: SqliteKeyValueStorage
    store: DomainStore
    inventory: InventoryService
    sales: SalesService
    notifications: NotificationService
    users: UserService
    auth: AuthService
    reporting: ReportingService


def build_container(
    storage_path: Path | str,
    *,
    strict_products: bool = False,
    clock: Callable[[], datetime] | None = None,
) -> AppContainer:
    storage = SqliteKeyValueStorage(storage_path)
    storage.init_db()

    store = DomainStore(CollectionRepository(storage), clock=clock)
    store.load()

    return AppContainer(
        storage=storage,
        store=store,
        inventory=InventoryService(store),
        sales=SalesService(store, strict_products=strict_products),
        notifications=NotificationService(store),
        users=UserService(store),
        auth=AuthService(store),
        reporting=ReportingService(store),
    )
