import logging

import pytest

from conftest import FixedClock
from erpdash.domain.errors import NotFoundError
from erpdash.domain.models import Notification, SaleInput, SaleLineInput
from erpdash.repositories.collection_repo import CollectionRepository
from erpdash.services.inventory_service import InventoryService
from erpdash.services.sales_service import SalesService


def _product(store, quantity: int, threshold: int, name: str = "Widget", price: float = 100.0):
    return InventoryService(store).add_product(name, "", "Hardware", price, 60.0, quantity, threshold)


def _sale(*lines: tuple[str, int, float]) -> SaleInput:
    inputs = tuple(SaleLineInput(product_id=pid, quantity=q, unit_price=p) for pid, q, p in lines)
    return SaleInput(lines=inputs, total_amount=sum(ln.total_price for ln in inputs), payment_method="Cash")


def test_low_stock_warning_reports_remaining_quantity(store):
    p = _product(store, quantity=5, threshold=5)

    outcome = SalesService(store).record_sale(_sale((p.id, 1, 100.0)))

    assert store.find_product(p.id).quantity == 4
    assert len(outcome.notifications) == 1
    alert = outcome.notifications[0]
    assert alert.type == "warning"
    assert alert.title == "Low Stock Alert"
    assert "4 remaining" in alert.message


def test_remaining_equal_to_threshold_is_low_stock(store):
    p = _product(store, quantity=8, threshold=5)

    outcome = SalesService(store).record_sale(_sale((p.id, 3, 100.0)))

    assert store.find_product(p.id).quantity == 5
    assert [n.type for n in outcome.notifications] == ["warning"]


def test_selling_last_units_emits_only_out_of_stock(store):
    p = _product(store, quantity=2, threshold=5)

    outcome = SalesService(store).record_sale(_sale((p.id, 2, 100.0)))

    assert store.find_product(p.id).quantity == 0
    assert len(outcome.notifications) == 1
    assert outcome.notifications[0].type == "error"
    assert outcome.notifications[0].title == "Out of Stock Alert"
    assert outcome.notifications[0].message == "Widget is now out of stock!"


def test_overselling_goes_negative_and_is_out_of_stock(store):
    p = _product(store, quantity=2, threshold=1)

    outcome = SalesService(store).record_sale(_sale((p.id, 5, 100.0)))

    assert store.find_product(p.id).quantity == -3
    assert [n.type for n in outcome.notifications] == ["error"]


def test_healthy_stock_emits_nothing_and_leaves_notifications_untouched(store, storage):
    p = _product(store, quantity=50, threshold=5)
    storage.writes.clear()

    outcome = SalesService(store).record_sale(_sale((p.id, 1, 100.0)))

    assert outcome.notifications == ()
    assert store.notifications == ()
    assert storage.writes == ["erp_sales", "erp_products"]


def test_repeated_product_lines_decrement_sequentially(store, storage):
    p = _product(store, quantity=10, threshold=5)
    storage.writes.clear()

    outcome = SalesService(store).record_sale(_sale((p.id, 3, 100.0), (p.id, 4, 90.0)))

    assert store.find_product(p.id).quantity == 3
    # first line leaves 7 (healthy), second leaves 3 (low)
    assert [n.type for n in outcome.notifications] == ["warning"]
    assert "3 remaining" in outcome.notifications[0].message
    assert storage.writes == ["erp_sales", "erp_products", "erp_notifications"]


def test_each_product_is_decremented_by_exactly_its_sold_quantity(store):
    a = _product(store, quantity=20, threshold=2, name="A")
    b = _product(store, quantity=7, threshold=2, name="B")
    c = _product(store, quantity=4, threshold=0, name="Untouched")

    SalesService(store).record_sale(_sale((a.id, 6, 10.0), (b.id, 1, 20.0)))

    assert store.find_product(a.id).quantity == 14
    assert store.find_product(b.id).quantity == 6
    assert store.find_product(c.id) == c


def test_sale_record_carries_line_totals_and_trusted_total(store, clock):
    p = _product(store, quantity=10, threshold=1, price=250.0)
    q = _product(store, quantity=10, threshold=1, name="Gadget", price=40.0)

    sale_input = _sale((p.id, 2, 250.0), (q.id, 3, 40.0))
    sale = SalesService(store).record_sale(sale_input).sale

    assert sale.total_amount == 620.0
    assert sum(it.total_price for it in sale.items) == sale.total_amount
    assert [(it.product_name, it.quantity, it.total_price) for it in sale.items] == [
        ("Widget", 2, 500.0),
        ("Gadget", 3, 120.0),
    ]
    assert sale.date == clock()
    assert store.sales[-1] == sale


def test_total_amount_is_stored_as_given(store):
    p = _product(store, quantity=10, threshold=1)
    sale_input = SaleInput(
        lines=(SaleLineInput(product_id=p.id, quantity=1, unit_price=100.0),),
        total_amount=95.0,
    )

    sale = SalesService(store).record_sale(sale_input).sale

    assert sale.total_amount == 95.0
    assert sale.items[0].total_price == 100.0


def test_product_updated_at_moves_to_sale_time(store, clock: FixedClock):
    p = _product(store, quantity=10, threshold=1)
    clock.advance(hours=2)

    SalesService(store).record_sale(_sale((p.id, 1, 100.0)))

    updated = store.find_product(p.id)
    assert updated.updated_at == clock()
    assert updated.created_at == p.created_at


def test_new_alerts_are_prepended_latest_line_first(store):
    older = Notification(id="n-1", title="System Update", message="m", type="info", read=False, date=store.clock())
    store.replace_notifications([older])
    a = _product(store, quantity=3, threshold=5, name="A")
    b = _product(store, quantity=1, threshold=5, name="B")

    SalesService(store).record_sale(_sale((a.id, 1, 10.0), (b.id, 1, 10.0)))

    titles = [(n.title, n.message) for n in store.notifications]
    assert titles[0] == ("Out of Stock Alert", "B is now out of stock!")
    assert titles[1] == ("Low Stock Alert", "A is running low on stock (2 remaining)")
    assert store.notifications[2] == older


def test_missing_product_line_is_skipped_and_reported(store, caplog):
    p = _product(store, quantity=10, threshold=1)

    with caplog.at_level(logging.WARNING, logger="erpdash.sales"):
        outcome = SalesService(store).record_sale(_sale(("ghost", 1, 5.0), (p.id, 2, 100.0)))

    assert outcome.skipped_product_ids == ("ghost",)
    assert store.find_product(p.id).quantity == 8
    assert len(store.sales) == 1
    assert [it.product_id for it in store.sales[0].items] == ["ghost", p.id]
    assert "sale_line_skipped" in caplog.text


def test_sale_with_only_missing_products_does_not_rewrite_products(store, storage):
    _product(store, quantity=10, threshold=1)
    storage.writes.clear()

    outcome = SalesService(store).record_sale(_sale(("ghost", 1, 5.0)))

    assert outcome.skipped_product_ids == ("ghost",)
    assert storage.writes == ["erp_sales"]


def test_strict_mode_rejects_missing_product_before_any_change(store, storage):
    p = _product(store, quantity=10, threshold=1)
    storage.writes.clear()

    with pytest.raises(NotFoundError, match="ghost"):
        SalesService(store, strict_products=True).record_sale(_sale((p.id, 1, 100.0), ("ghost", 1, 5.0)))

    assert store.sales == ()
    assert store.find_product(p.id).quantity == 10
    assert storage.writes == []


def test_persisted_collections_match_memory_after_sale(store, storage):
    p = _product(store, quantity=3, threshold=5)

    SalesService(store).record_sale(_sale((p.id, 1, 100.0)))

    repo = CollectionRepository(storage)
    assert repo.load_products() == list(store.products)
    assert repo.load_sales() == list(store.sales)
    assert repo.load_notifications() == list(store.notifications)


def test_sale_queries(store, clock: FixedClock):
    p = _product(store, quantity=50, threshold=1, name="Desk Lamp")
    sales = SalesService(store)
    first = sales.record_sale(SaleInput(
        lines=(SaleLineInput(product_id=p.id, quantity=1, unit_price=100.0),),
        total_amount=100.0,
        customer_name="Priya Patel",
    )).sale
    clock.advance(days=1)
    second = sales.record_sale(_sale((p.id, 2, 100.0))).sale

    assert sales.list_sales() == [first, second]
    assert sales.get_sale(first.id) == first
    assert sales.recent_sales(limit=1) == [second]
    assert sales.search_sales("priya") == [first]
    assert sales.search_sales("lamp") == [second, first]
    with pytest.raises(NotFoundError):
        sales.get_sale("nope")
