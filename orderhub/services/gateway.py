"""
Realtime Message Gateway

Turns inbound WebSocket frames into coordinator calls. A bad frame or a
failing handler never closes the connection: the sender gets a scoped
``error`` event and the loop keeps reading.
"""

import json
import logging
from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from orderhub.core.exceptions import OrderingError
from orderhub.services.coordinator import OrderLifecycleCoordinator
from orderhub.services.realtime.events import (
    INBOUND_EVENT_NAMES,
    EchoEvent,
    JoinRoomEvent,
    OutboundEvent,
    ToggleAvailabilityEvent,
    TrackOrderEvent,
    parse_inbound,
)

logger = logging.getLogger(__name__)


class RealtimeGateway:
    """Dispatches parsed inbound events for one process."""

    def __init__(self, coordinator: OrderLifecycleCoordinator):
        self.coordinator = coordinator

    @property
    def router(self):
        return self.coordinator.router

    async def _error(self, connection_id: str, message: str) -> None:
        await self.router.emit_to(connection_id, OutboundEvent.ERROR, {"message": message})

    async def handle_text(self, connection_id: str, text: str) -> None:
        """Decode one text frame and handle it."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError:
            logger.warning(f"❌ Malformed frame from {connection_id}")
            await self._error(connection_id, "Malformed message: expected JSON")
            return
        await self.handle(connection_id, raw)

    async def handle_bytes(self, connection_id: str, payload: bytes) -> None:
        """Binary frames are accepted when they hold UTF-8 JSON."""
        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning(f"❌ Undecodable binary frame from {connection_id}")
            await self._error(connection_id, "Malformed message: expected UTF-8 JSON")
            return
        await self.handle_text(connection_id, text)

    async def handle(self, connection_id: str, raw: Any) -> None:
        """Validate and dispatch one decoded frame."""
        name = raw.get("event") if isinstance(raw, dict) else None
        if name not in INBOUND_EVENT_NAMES:
            logger.warning(f"❌ Unknown event from {connection_id}: {name!r}")
            await self._error(connection_id, f"Unknown event: {name}")
            return

        try:
            event = parse_inbound(raw)
        except PydanticValidationError as e:
            logger.warning(f"❌ Invalid {name} payload from {connection_id}: {e.error_count()} error(s)")
            await self._error(connection_id, f"Invalid {name} data")
            return

        try:
            await self._dispatch(connection_id, event)
        except OrderingError as e:
            await self._error(connection_id, f"Failed to handle {name}: {e.message}")
        except Exception as e:
            logger.exception(f"❌ Error handling {name} from {connection_id}: {e}")
            await self._error(connection_id, f"Failed to handle {name}")

    async def _dispatch(self, connection_id: str, event: Any) -> None:
        if isinstance(event, JoinRoomEvent):
            await self.coordinator.join_room(
                connection_id, event.data.user_type, event.data.user_id
            )

        elif isinstance(event, TrackOrderEvent):
            order = self.coordinator.track_order(event.order_id)
            if order is None:
                await self.router.emit_to(
                    connection_id, OutboundEvent.ORDER_NOT_FOUND, {"orderId": event.order_id}
                )
                return
            await self.router.emit_to(connection_id, OutboundEvent.ORDER_TRACKING_UPDATE, {
                "orderId": order.id,
                "status": order.status.value,
                "estimatedTime": order.estimated_time,
                "createdAt": order.created_at.isoformat(),
            })

        elif isinstance(event, ToggleAvailabilityEvent):
            await self.coordinator.set_item_availability(
                event.data.item_id, event.data.available
            )

        elif isinstance(event, EchoEvent):
            logger.info(f"🧪 Test event received from {connection_id}")
            await self.router.emit_to(connection_id, OutboundEvent.TEST_RESPONSE, {
                "message": "Test successful",
                "timestamp": datetime.now().isoformat(),
                "originalData": event.data,
            })
