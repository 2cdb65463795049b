"""
Order Lifecycle Coordinator

The one seam through which state changes. Every mutation follows the
same order:

    validate/sanitize -> mutate store or catalog -> broadcast

A broadcast only happens once the mutation is visible to reads, and a
failed mutation broadcasts nothing. Store and catalog calls are
synchronous, so on the event loop each mutation runs to completion
before the next message is handled.

Version: 1.0.0
"""

import logging
from datetime import datetime
from functools import lru_cache
from typing import Any, Optional

from orderhub.core.exceptions import NotFoundError
from orderhub.models import ConnectionEntry, MenuItem, Order, UserRole
from orderhub.schemas import RestaurantStats
from orderhub.services.realtime import BroadcastRouter, get_broadcast_router
from orderhub.services.store import (
    BaseMenuCatalog,
    BaseOrderStore,
    get_menu_catalog,
    get_order_store,
)

logger = logging.getLogger(__name__)


class OrderLifecycleCoordinator:
    """
    Orchestrates orders, menu and the realtime channel.

    Args:
        orders: Order store (exclusively owned)
        menu: Menu catalog (exclusively owned)
        router: Broadcast router
    """

    def __init__(
        self,
        orders: BaseOrderStore,
        menu: BaseMenuCatalog,
        router: BroadcastRouter,
    ):
        self.orders = orders
        self.menu = menu
        self.router = router

    # =========================================================================
    # ORDERS
    # =========================================================================

    async def create_order(self, payload: Any) -> Order:
        """
        Place an order.

        Raises:
            ValidationError: with every violation; nothing stored or sent
        """
        order = self.orders.create(payload)
        logger.info(
            f"✅ New order created: {order.id} (#{order.order_number}) - "
            f"₹{order.total}, est. {order.estimated_time} min"
        )
        await self.router.order_created(order)
        return order

    async def update_order_status(self, order_id: str, status: Optional[str]) -> Order:
        """
        Raises:
            InvalidTransitionError: status outside the closed enum
            NotFoundError: unknown order id
        """
        order = self.orders.set_status(order_id, status)
        logger.info(f"✅ Order {order_id} status updated to: {order.status.value}")
        await self.router.order_status_changed(order)
        return order

    def list_orders(self) -> list[Order]:
        return self.orders.list()

    def get_order(self, order_id: str) -> Order:
        order = self.orders.get(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return order

    def track_order(self, order_id: str) -> Optional[Order]:
        return self.orders.get(order_id)

    def restaurant_stats(self, now: Optional[datetime] = None) -> RestaurantStats:
        stats = self.orders.stats(now)
        return RestaurantStats(
            total_orders=stats.total,
            today_orders=stats.created_today,
            pending_orders=stats.pending,
            completed_orders=stats.delivered,
            total_revenue=stats.total_revenue,
            today_revenue=stats.today_revenue,
            connected_users=self.router.presence.stats(),
        )

    # =========================================================================
    # MENU
    # =========================================================================

    def list_menu(self) -> list[MenuItem]:
        return self.menu.list()

    async def _menu_changed(self) -> None:
        await self.router.menu_updated(self.menu.list())

    async def add_menu_item(self, data: dict[str, Any]) -> MenuItem:
        item = self.menu.add(data)
        logger.info(f"✅ New menu item added: {item.name} ({item.id})")
        await self._menu_changed()
        return item

    async def update_menu_item(self, item_id: int, patch: dict[str, Any]) -> MenuItem:
        item = self.menu.update(item_id, patch)
        logger.info(f"✅ Menu item updated: {item.name} ({item.id})")
        await self._menu_changed()
        return item

    async def remove_menu_item(self, item_id: int) -> MenuItem:
        item = self.menu.remove(item_id)
        logger.info(f"✅ Menu item deleted: {item.name} ({item.id})")
        await self._menu_changed()
        return item

    async def set_item_availability(self, item_id: int, available: bool) -> MenuItem:
        item = self.menu.set_availability(item_id, available)
        logger.info(f"🍽️ Menu item {item_id} availability: {available}")
        await self._menu_changed()
        return item

    # =========================================================================
    # PRESENCE
    # =========================================================================

    async def join_room(
        self,
        connection_id: str,
        role: UserRole,
        user_id: Optional[str] = None,
    ) -> ConnectionEntry:
        return await self.router.join(connection_id, role, user_id)

    async def disconnect(self, connection_id: str) -> Optional[ConnectionEntry]:
        return await self.router.disconnect(connection_id)


@lru_cache()
def get_coordinator() -> OrderLifecycleCoordinator:
    """Get the process-wide coordinator wired to the shared store and router."""
    return OrderLifecycleCoordinator(
        orders=get_order_store(),
        menu=get_menu_catalog(),
        router=get_broadcast_router(),
    )


def reset_coordinator() -> None:
    """Clear the cached coordinator instance."""
    get_coordinator.cache_clear()
