"""
Broadcast Router

Room-based fan-out over the live WebSocket connections. The router owns
the PresenceRegistry and the connection transports; everything else
asks it to deliver domain events.

Routing:
    - new order       -> newOrder to restaurant_room,
                         orderConfirmed to customer_room
    - status change   -> orderStatusUpdate to customer_room
    - menu mutation   -> menuUpdated (full catalog) to everyone
    - join/disconnect -> connectionStats to everyone

Delivery is fire-and-forget: a failing recipient is logged and skipped,
the caller never sees the error.

Version: 1.0.0
"""

import logging
from datetime import datetime
from typing import Any, Iterable, Optional, Protocol

from orderhub.models import (
    CUSTOMER_ROOM,
    RESTAURANT_ROOM,
    ConnectionEntry,
    ConnectionStats,
    MenuItem,
    Order,
    UserRole,
)
from orderhub.services.realtime.events import OutboundEvent, envelope, event_name
from orderhub.services.realtime.presence import PresenceRegistry

logger = logging.getLogger(__name__)


class Connection(Protocol):
    """Anything that can push a JSON frame (FastAPI WebSocket qualifies)."""

    async def send_json(self, data: Any) -> None:
        ...


class BroadcastRouter:
    """
    Delivers events to single connections, rooms, or everyone.

    Args:
        presence: Registry to own (a fresh one by default)
        restaurant_name: Used in the join acknowledgement
        instrumentation: Also send orderCreated/orderStatusChanged to everyone
    """

    def __init__(
        self,
        presence: Optional[PresenceRegistry] = None,
        restaurant_name: str = "Zaika Junction",
        instrumentation: bool = True,
    ):
        self.presence = presence or PresenceRegistry()
        self.restaurant_name = restaurant_name
        self.instrumentation = instrumentation
        self._connections: dict[str, Connection] = {}
        self._stale: set[str] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    # =========================================================================
    # CONNECTION LIFECYCLE
    # =========================================================================

    def connect(self, connection_id: str, connection: Connection) -> None:
        """Register a transport. It receives global events but no room events until it joins."""
        self._connections[connection_id] = connection
        logger.info(f"🔌 Connection opened: {connection_id}")

    async def join(
        self,
        connection_id: str,
        role: UserRole,
        user_id: Optional[str] = None,
    ) -> ConnectionEntry:
        """
        Place a connection in its role's room, leaving any previous room.

        Sends the ``connected`` acknowledgement to the connection, then
        republishes connection stats to everyone.
        """
        entry, previous = self.presence.join(connection_id, role, user_id)
        if previous is not None and previous.room_name != entry.room_name:
            logger.info(f"👤 {connection_id} left previous room: {previous.room_name}")
        logger.info(
            f"👤 {role.value} joined room: {entry.room_name} ({connection_id}), "
            f"room now has {len(self.presence.members(entry.room_name))} members"
        )

        await self.emit_to(connection_id, OutboundEvent.CONNECTED, {
            "message": f"Welcome to {self.restaurant_name} {role.value} app!",
            "connectionId": connection_id,
            "roomName": entry.room_name,
            "timestamp": datetime.now().isoformat(),
        })
        await self.publish_connection_stats()
        return entry

    async def disconnect(self, connection_id: str) -> Optional[ConnectionEntry]:
        """
        Forget a connection. Stats are republished only if it had joined.
        """
        self._connections.pop(connection_id, None)
        entry = self.presence.leave(connection_id)
        if entry is None:
            logger.info(f"🔌 Unknown connection closed: {connection_id}")
            return None

        logger.info(f"🔌 {entry.role.value} disconnected: {connection_id} (left {entry.room_name})")
        await self.publish_connection_stats()
        return entry

    # =========================================================================
    # DELIVERY PRIMITIVES
    # =========================================================================

    async def _send(self, connection_id: str, frame: dict[str, Any]) -> bool:
        connection = self._connections.get(connection_id)
        if connection is None:
            return False
        try:
            await connection.send_json(frame)
            return True
        except Exception as e:
            logger.warning(f"📡 Delivery of {frame['event']} to {connection_id} failed: {e}")
            self._stale.add(connection_id)
            return False

    async def _drop_stale(self) -> None:
        """Forget connections whose last send failed."""
        while self._stale:
            connection_id = self._stale.pop()
            logger.info(f"🔌 Dropping dead connection: {connection_id}")
            await self.disconnect(connection_id)

    async def _fan_out(self, connection_ids: Iterable[str], event: str, data: Any) -> int:
        frame = envelope(event, data)
        delivered = 0
        for connection_id in list(connection_ids):
            if await self._send(connection_id, frame):
                delivered += 1
        await self._drop_stale()
        return delivered

    async def emit_to(self, connection_id: str, event: str, data: Any) -> bool:
        """Send to one connection."""
        delivered = await self._send(connection_id, envelope(event, data))
        await self._drop_stale()
        return delivered

    async def emit_to_room(self, room_name: str, event: str, data: Any) -> int:
        """Send to current members of a room. Returns the delivered count."""
        delivered = await self._fan_out(self.presence.members(room_name), event, data)
        logger.debug(f"📡 {event_name(event)} -> {room_name} ({delivered} delivered)")
        return delivered

    async def emit_to_all(self, event: str, data: Any) -> int:
        """Send to every open connection, joined or not."""
        return await self._fan_out(self._connections.keys(), event, data)

    async def publish_connection_stats(self) -> ConnectionStats:
        stats = self.presence.stats()
        logger.info(
            f"📊 Connection stats: customers={stats.customers} "
            f"restaurants={stats.restaurants} total={stats.total}"
        )
        await self.emit_to_all(OutboundEvent.CONNECTION_STATS, stats.to_dict())
        return stats

    # =========================================================================
    # DOMAIN EVENTS
    # =========================================================================

    async def order_created(self, order: Order) -> None:
        """
        Staff get the full order; the whole customer room gets the
        confirmation and clients filter by order id.
        """
        await self.emit_to_room(RESTAURANT_ROOM, OutboundEvent.NEW_ORDER, order.to_dict())
        await self.emit_to_room(CUSTOMER_ROOM, OutboundEvent.ORDER_CONFIRMED, {
            "orderId": order.id,
            "estimatedTime": order.estimated_time,
            "orderNumber": order.order_number,
        })
        if self.instrumentation:
            await self.emit_to_all(OutboundEvent.ORDER_CREATED, {
                "orderId": order.id,
                "status": "created",
                "timestamp": datetime.now().isoformat(),
                "connectedUsers": len(self.presence),
            })

    async def order_status_changed(self, order: Order) -> None:
        await self.emit_to_room(CUSTOMER_ROOM, OutboundEvent.ORDER_STATUS_UPDATE, {
            "orderId": order.id,
            "status": order.status.value,
            "order": order.to_dict(),
        })
        if self.instrumentation:
            await self.emit_to_all(OutboundEvent.ORDER_STATUS_CHANGED, {
                "orderId": order.id,
                "status": order.status.value,
                "timestamp": datetime.now().isoformat(),
                "connectedUsers": len(self.presence),
            })

    async def menu_updated(self, items: list[MenuItem]) -> None:
        await self.emit_to_all(OutboundEvent.MENU_UPDATED, [item.to_dict() for item in items])
