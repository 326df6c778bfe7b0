from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable, Optional

from erpdash.application.seed import SeedData, build_seed_data
from erpdash.domain.models import Notification, Product, Sale, User
from erpdash.repositories.collection_repo import CollectionRepository

log = logging.getLogger("erpdash.storage")


class DomainStore:
    """In-memory owner of the domain collections, mirrored to storage.

    Services receive the store explicitly. Reads return tuples so callers
    cannot mutate the collections in place; every ``replace_*`` call swaps
    the whole collection and persists it with a single write.
    """

    def __init__(
        self,
        repo: CollectionRepository,
        clock: Callable[[], datetime] | None = None,
        seed_factory: Callable[[], SeedData] | None = None,
    ):
        self.repo = repo
        self.clock = clock or datetime.now
        self.seed_factory = seed_factory or (lambda: build_seed_data(now=self.clock()))
        self._products: list[Product] = []
        self._sales: list[Sale] = []
        self._notifications: list[Notification] = []
        self._users: list[User] = []
        self._current_user: Optional[User] = None

    def load(self) -> None:
        seed: Optional[SeedData] = None

        def seed_data() -> SeedData:
            nonlocal seed
            if seed is None:
                seed = self.seed_factory()
            return seed

        products = self.repo.load_products()
        if products is None:
            self.replace_products(seed_data().products)
        else:
            self._products = products

        sales = self.repo.load_sales()
        if sales is None:
            self.replace_sales(seed_data().sales)
        else:
            self._sales = sales

        notifications = self.repo.load_notifications()
        if notifications is None:
            self.replace_notifications(seed_data().notifications)
        else:
            self._notifications = notifications

        users = self.repo.load_users()
        if users is None:
            self.replace_users(seed_data().users)
        else:
            self._users = users

        self._current_user = self.repo.load_current_user()
        log.info(
            "store_loaded products=%s sales=%s notifications=%s users=%s seeded=%s",
            len(self._products), len(self._sales), len(self._notifications), len(self._users), seed is not None,
        )

    @property
    def products(self) -> tuple[Product, ...]:
        return tuple(self._products)

    @property
    def sales(self) -> tuple[Sale, ...]:
        return tuple(self._sales)

    @property
    def notifications(self) -> tuple[Notification, ...]:
        return tuple(self._notifications)

    @property
    def users(self) -> tuple[User, ...]:
        return tuple(self._users)

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    def replace_products(self, products: Iterable[Product]) -> None:
        self._products = list(products)
        self.repo.save_products(self._products)

    def replace_sales(self, sales: Iterable[Sale]) -> None:
        self._sales = list(sales)
        self.repo.save_sales(self._sales)

    def replace_notifications(self, notifications: Iterable[Notification]) -> None:
        self._notifications = list(notifications)
        self.repo.save_notifications(self._notifications)

    def replace_users(self, users: Iterable[User]) -> None:
        self._users = list(users)
        self.repo.save_users(self._users)

    def set_current_user(self, user: Optional[User]) -> None:
        self._current_user = user
        if user is None:
            self.repo.clear_current_user()
        else:
            self.repo.save_current_user(user)

    def find_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self._products if p.id == product_id), None)

    def find_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self._users if u.id == user_id), None)
