"""
                        Services Module

Business logic behind the API and the realtime channel.

Services:
    - store: order store and menu catalog (in-memory)
    - estimation: preparation time estimate
    - validation: order payload rules and text sanitizing
    - realtime: presence registry and room broadcast router
    - coordinator: validate -> mutate -> broadcast orchestration
    - gateway: inbound WebSocket event dispatch
"""

from orderhub.services.coordinator import (
    OrderLifecycleCoordinator,
    get_coordinator,
    reset_coordinator,
)

__all__ = ["OrderLifecycleCoordinator", "get_coordinator", "reset_coordinator"]
