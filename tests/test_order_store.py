"""Tests for the in-memory order store."""

from datetime import datetime, timedelta

import pytest

from orderhub.core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from orderhub.models import OrderStatus
from orderhub.services.store import InMemoryMenuCatalog, InMemoryOrderStore, SAMPLE_MENU
from tests.conftest import SteppingClock, make_order_payload


class TestCreate:
    """Tests for InMemoryOrderStore.create."""

    def test_assigns_identity_and_defaults(self, store, order_payload):
        order = store.create(order_payload)

        assert order.id.startswith("ORD")
        assert order.order_number == 1
        assert order.status == OrderStatus.PENDING
        assert order.payment_method == "COD"
        assert order.delivery_charge == 0
        assert order.updated_at is None
        # Gulab Jamun: 15 min x 2 -> 15 + 15
        assert order.estimated_time == 30

    def test_order_numbers_and_ids_are_monotonic(self, store):
        orders = [store.create(make_order_payload()) for _ in range(5)]

        numbers = [o.order_number for o in orders]
        ids = [int(o.id[3:]) for o in orders]
        assert numbers == [1, 2, 3, 4, 5]
        assert ids == sorted(ids)
        assert len(set(ids)) == 5

    def test_ids_unique_when_clock_stands_still(self, catalog):
        frozen = SteppingClock(datetime(2026, 10, 18, 12, 0))
        store = InMemoryOrderStore(catalog=catalog, clock=frozen)

        first = store.create(make_order_payload())
        second = store.create(make_order_payload())

        assert first.id != second.id
        assert second.created_at >= first.created_at

    def test_listing_is_newest_first(self, store):
        first = store.create(make_order_payload())
        second = store.create(make_order_payload())

        assert [o.id for o in store.list()] == [second.id, first.id]

    def test_missing_customer_name_is_rejected_without_insert(self, store):
        store.create(make_order_payload())
        payload = make_order_payload(customerInfo={"phone": "123"})

        with pytest.raises(ValidationError) as exc_info:
            store.create(payload)

        assert any("Customer name" in e for e in exc_info.value.errors)
        assert store.count() == 1

    def test_type_errors_after_rules_are_still_validation_errors(self, store):
        payload = make_order_payload(
            customerInfo={"name": "Ravi", "phone": {"mobile": "1"}}
        )

        with pytest.raises(ValidationError):
            store.create(payload)

        assert store.count() == 0

    def test_numeric_contact_fields_are_stored_as_sent(self, store):
        payload = make_order_payload(
            customerInfo={"name": "Ravi", "phone": 9876543210, "address": {"fullAddress": 42}},
            paymentMethod=7,
        )

        order = store.create(payload)

        assert order.customer_info.phone == 9876543210
        assert order.customer_info.address.full_address == 42
        assert order.payment_method == 7

    def test_free_text_is_sanitized(self, store):
        payload = make_order_payload(
            items=[{"name": "<b>Samosa</b>", "price": 25, "quantity": 1}],
            customerInfo={
                "name": "<script>alert(1)</script>Meera",
                "phone": " <98765> ",
                "address": {"fullAddress": "<i>Flat 4</i>", "landmark": "Temple"},
            },
            paymentMethod="<UPI>",
        )

        order = store.create(payload)

        assert order.customer_info.name == "Meera"
        assert order.customer_info.phone == "98765"
        assert order.customer_info.address.full_address == "iFlat 4/i"
        assert order.items[0].name == "bSamosa/b"
        assert order.payment_method == "UPI"
        assert order.to_dict()["customerInfo"]["address"]["landmark"] == "Temple"

    def test_lines_are_snapshots(self, catalog, store, order_payload):
        order = store.create(order_payload)

        catalog.update(1, {"name": "Renamed", "price": 999})

        stored = store.get(order.id)
        assert stored.items[0].name == "Gulab Jamun"
        assert stored.items[0].price == 120

    def test_delivery_charge_and_total_kept_as_sent(self, store):
        order = store.create(make_order_payload(total=270, deliveryCharge=30))

        assert order.total == 270
        assert order.delivery_charge == 30

    def test_returned_order_is_a_copy(self, store, order_payload):
        order = store.create(order_payload)
        order.status = OrderStatus.CANCELLED

        assert store.get(order.id).status == OrderStatus.PENDING


class TestSetStatus:
    """Tests for InMemoryOrderStore.set_status."""

    def test_updates_status_and_timestamp(self, store, order_payload):
        order = store.create(order_payload)
        before = store.get(order.id).created_at

        store.set_status(order.id, "preparing")

        updated = store.get(order.id)
        assert updated.status == OrderStatus.PREPARING
        assert updated.updated_at >= before

    def test_unknown_status_is_rejected_and_nothing_changes(self, store, order_payload):
        order = store.create(order_payload)

        with pytest.raises(InvalidTransitionError):
            store.set_status(order.id, "not-a-status")

        unchanged = store.get(order.id)
        assert unchanged.status == OrderStatus.PENDING
        assert unchanged.updated_at is None

    def test_unknown_order(self, store):
        with pytest.raises(NotFoundError):
            store.set_status("ORD0", "ready")

    def test_backward_transition_is_permitted(self, store, order_payload):
        order = store.create(order_payload)
        store.set_status(order.id, "delivered")

        reverted = store.set_status(order.id, "pending")

        assert reverted.status == OrderStatus.PENDING

    def test_updated_at_never_goes_backwards(self, catalog):
        clock = SteppingClock(datetime(2026, 10, 18, 12, 0), step=timedelta(seconds=-1))
        store = InMemoryOrderStore(catalog=catalog, clock=clock)
        order = store.create(make_order_payload())

        first = store.set_status(order.id, "preparing").updated_at
        second = store.set_status(order.id, "ready").updated_at

        assert second >= first >= order.created_at


class TestStats:

    def test_stats_recomputed_over_collection(self):
        clock = SteppingClock(datetime(2026, 10, 17, 20, 0), step=timedelta(hours=3))
        store = InMemoryOrderStore(catalog=InMemoryMenuCatalog(SAMPLE_MENU), clock=clock)
        yesterday = store.create(make_order_payload(total=100))
        today = store.create(make_order_payload(total=250))
        store.set_status(yesterday.id, "delivered")

        stats = store.stats(now=datetime(2026, 10, 18, 9, 0))

        assert today.created_at.date() == datetime(2026, 10, 18).date()
        assert stats.created_today == 1
        assert stats.today_revenue == 250
        assert stats.total == 2
        assert stats.pending == 1
        assert stats.delivered == 1
        assert stats.total_revenue == 350

    def test_today_figures(self):
        clock = SteppingClock(datetime(2026, 10, 18, 9, 0), step=timedelta(minutes=5))
        store = InMemoryOrderStore(catalog=InMemoryMenuCatalog(SAMPLE_MENU), clock=clock)
        store.create(make_order_payload(total=100))
        store.create(make_order_payload(total=50))

        stats = store.stats(now=datetime(2026, 10, 18, 23, 0))

        assert stats.created_today == 2
        assert stats.today_revenue == 150

    def test_empty_store(self, store):
        stats = store.stats()

        assert stats.total == 0
        assert stats.total_revenue == 0
