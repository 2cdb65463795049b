"""
In-Memory Store Implementations

Process-local order store and menu catalog. Every mutation runs under a
re-entrant lock and ids come from a monotonic millisecond generator, so
ids stay unique and order numbers stay monotonic even if handlers are
dispatched from a threadpool.

Reads hand out deep copies: callers never hold a live reference into
the store's collections.

Version: 1.0.0
"""

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Iterable, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from orderhub.core.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from orderhub.models import (
    CustomerInfo,
    MenuItem,
    Order,
    OrderLine,
    OrderStats,
    OrderStatus,
)
from orderhub.services.estimation import EstimationPolicy
from orderhub.services.store.base import BaseMenuCatalog, BaseOrderStore
from orderhub.services.validation import sanitize, validate_order

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class TimestampIdGenerator:
    """
    Millisecond timestamps that never repeat.

    Two calls inside the same millisecond (or after the wall clock steps
    backwards) get last + 1 instead of a duplicate.
    """

    def __init__(self, clock: Clock = datetime.now):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            now_ms = int(self._clock().timestamp() * 1000)
            self._last = max(now_ms, self._last + 1)
            return self._last


def _as_number(value: Any) -> Union[int, float]:
    """Coerce a loosely typed amount, falling back to 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def _pydantic_messages(exc: PydanticValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"])
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return messages


# =============================================================================
# MENU CATALOG
# =============================================================================

class InMemoryMenuCatalog(BaseMenuCatalog):
    """Menu catalog backed by a list."""

    def __init__(
        self,
        items: Optional[Iterable[dict[str, Any]]] = None,
        clock: Clock = datetime.now,
    ):
        self._clock = clock
        self._ids = TimestampIdGenerator(clock)
        self._lock = threading.RLock()
        self._items: list[MenuItem] = [
            MenuItem.model_validate(item) for item in (items or [])
        ]
        logger.info(f"InMemoryMenuCatalog initialized ({len(self._items)} items)")

    def _index_of(self, item_id: int) -> int:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        raise NotFoundError("Menu item not found")

    def list(self) -> list[MenuItem]:
        with self._lock:
            return [item.model_copy(deep=True) for item in self._items]

    def get(self, item_id: int) -> Optional[MenuItem]:
        with self._lock:
            try:
                return self._items[self._index_of(item_id)].model_copy(deep=True)
            except NotFoundError:
                return None

    def add(self, data: dict[str, Any]) -> MenuItem:
        with self._lock:
            fields = {k: v for k, v in data.items() if k != "id"}
            fields.update(
                id=self._ids.next(),
                available=True,
                createdAt=self._clock(),
            )
            try:
                item = MenuItem.model_validate(fields)
            except PydanticValidationError as e:
                raise ValidationError(_pydantic_messages(e))
            self._items.append(item)
            return item.model_copy(deep=True)

    def update(self, item_id: int, patch: dict[str, Any]) -> MenuItem:
        with self._lock:
            index = self._index_of(item_id)
            merged = self._items[index].model_dump(by_alias=True)
            merged.update({k: v for k, v in patch.items() if k != "id"})
            merged["updatedAt"] = self._clock()
            try:
                item = MenuItem.model_validate(merged)
            except PydanticValidationError as e:
                raise ValidationError(_pydantic_messages(e))
            self._items[index] = item
            return item.model_copy(deep=True)

    def remove(self, item_id: int) -> MenuItem:
        with self._lock:
            return self._items.pop(self._index_of(item_id))

    def set_availability(self, item_id: int, available: bool) -> MenuItem:
        with self._lock:
            item = self._items[self._index_of(item_id)]
            item.available = available
            item.updated_at = self._clock()
            return item.model_copy(deep=True)


# =============================================================================
# ORDER STORE
# =============================================================================

class InMemoryOrderStore(BaseOrderStore):
    """
    Order store backed by a newest-first list.

    Args:
        catalog: Used to resolve preparation times for the estimate
        policy: Estimation constants
        default_payment_method: Stored when the payload names none
        clock: Source of timestamps (injectable for tests)
    """

    def __init__(
        self,
        catalog: BaseMenuCatalog,
        policy: Optional[EstimationPolicy] = None,
        default_payment_method: str = "COD",
        clock: Clock = datetime.now,
    ):
        self._catalog = catalog
        self._policy = policy or EstimationPolicy()
        self._default_payment_method = default_payment_method
        self._clock = clock
        self._ids = TimestampIdGenerator(clock)
        self._lock = threading.RLock()
        self._orders: list[Order] = []

    def _find(self, order_id: str) -> Optional[Order]:
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    def _build(self, payload: dict[str, Any]) -> Order:
        """Sanitize the payload and build the order. Caller holds the lock."""
        customer = payload["customerInfo"]
        address = customer.get("address")
        if isinstance(address, dict):
            address = {**address, "fullAddress": sanitize(address.get("fullAddress"))}
        else:
            address = None

        lines = [
            OrderLine(
                id=item.get("id") if isinstance(item.get("id"), int) else None,
                name=sanitize(item["name"]),
                price=item["price"],
                quantity=item["quantity"],
            )
            for item in payload["items"]
        ]

        delivery_charge = _as_number(payload.get("deliveryCharge"))

        created_at = self._clock()
        if self._orders and created_at < self._orders[0].created_at:
            created_at = self._orders[0].created_at

        return Order(
            id=f"ORD{self._ids.next()}",
            order_number=len(self._orders) + 1,
            items=lines,
            total=payload["total"],
            customer_info=CustomerInfo(
                name=sanitize(customer["name"]),
                phone=sanitize(customer.get("phone")),
                address=address,
            ),
            payment_method=sanitize(payload.get("paymentMethod"))
            or self._default_payment_method,
            delivery_charge=delivery_charge,
            status=OrderStatus.PENDING,
            created_at=created_at,
            estimated_time=self._policy.estimate(lines, self._catalog.get),
        )

    def create(self, payload: dict[str, Any]) -> Order:
        errors = validate_order(payload)
        if errors:
            raise ValidationError(errors)

        with self._lock:
            try:
                order = self._build(payload)
            except PydanticValidationError as e:
                raise ValidationError(_pydantic_messages(e))
            self._orders.insert(0, order)
            return order.model_copy(deep=True)

    def get(self, order_id: str) -> Optional[Order]:
        with self._lock:
            order = self._find(order_id)
            return order.model_copy(deep=True) if order else None

    def list(self) -> list[Order]:
        with self._lock:
            return [order.model_copy(deep=True) for order in self._orders]

    def set_status(self, order_id: str, status: str) -> Order:
        if status not in OrderStatus.values():
            raise InvalidTransitionError(
                f"Invalid status. Options: {OrderStatus.values()}"
            )

        with self._lock:
            order = self._find(order_id)
            if order is None:
                raise NotFoundError("Order not found")

            now = self._clock()
            floor = order.updated_at or order.created_at
            order.status = OrderStatus(status)
            order.updated_at = max(now, floor)
            return order.model_copy(deep=True)

    def stats(self, now: Optional[datetime] = None) -> OrderStats:
        today = (now or self._clock()).date()
        with self._lock:
            orders = list(self._orders)

        todays = [o for o in orders if o.created_at.date() == today]
        return OrderStats(
            total=len(orders),
            created_today=len(todays),
            pending=sum(1 for o in orders if o.status == OrderStatus.PENDING),
            delivered=sum(1 for o in orders if o.status == OrderStatus.DELIVERED),
            total_revenue=sum(o.total for o in orders),
            today_revenue=sum(o.total for o in todays),
        )

    def count(self) -> int:
        with self._lock:
            return len(self._orders)
