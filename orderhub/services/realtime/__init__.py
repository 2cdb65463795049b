"""
Realtime Channel Module

Room-based broadcast over WebSocket connections:
    - events: wire envelope and inbound event schemas
    - presence: connection -> role/room registry
    - router: room fan-out and connection statistics
"""

from functools import lru_cache

from orderhub.core.config import get_settings
from orderhub.services.realtime.events import (
    OutboundEvent,
    envelope,
    parse_inbound,
)
from orderhub.services.realtime.presence import PresenceRegistry
from orderhub.services.realtime.router import BroadcastRouter, Connection


@lru_cache()
def get_broadcast_router() -> BroadcastRouter:
    """Get the process-wide broadcast router."""
    settings = get_settings()
    return BroadcastRouter(
        restaurant_name=settings.restaurant_name,
        instrumentation=settings.broadcast_instrumentation,
    )


def reset_broadcast_router() -> None:
    """Clear the cached router instance."""
    get_broadcast_router.cache_clear()


__all__ = [
    "get_broadcast_router",
    "reset_broadcast_router",
    "BroadcastRouter",
    "Connection",
    "PresenceRegistry",
    "OutboundEvent",
    "envelope",
    "parse_inbound",
]
