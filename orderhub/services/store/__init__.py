"""
Store Factory

Provides single entry points for the order store and the menu catalog.
Only in-memory implementations exist; the factory keeps the rest of the
application unaware of that.

Usage:
    from orderhub.services.store import get_order_store

    store = get_order_store()
    order = store.create(payload)

Version: 1.0.0
"""

import logging
from functools import lru_cache

from orderhub.core.config import get_settings
from orderhub.services.estimation import EstimationPolicy
from orderhub.services.store.base import BaseMenuCatalog, BaseOrderStore
from orderhub.services.store.memory import (
    InMemoryMenuCatalog,
    InMemoryOrderStore,
    TimestampIdGenerator,
)
from orderhub.services.store.seed import SAMPLE_MENU

logger = logging.getLogger(__name__)


@lru_cache()
def get_menu_catalog() -> BaseMenuCatalog:
    """Get the process-wide menu catalog, seeded when configured."""
    settings = get_settings()
    items = SAMPLE_MENU if settings.seed_menu else []
    return InMemoryMenuCatalog(items=items)


@lru_cache()
def get_order_store() -> BaseOrderStore:
    """Get the process-wide order store."""
    settings = get_settings()
    logger.info("Order Store: Using InMemoryOrderStore")
    return InMemoryOrderStore(
        catalog=get_menu_catalog(),
        policy=EstimationPolicy.from_settings(),
        default_payment_method=settings.default_payment_method,
    )


def reset_stores() -> None:
    """Clear the cached instances (fresh empty state on next access)."""
    get_order_store.cache_clear()
    get_menu_catalog.cache_clear()


__all__ = [
    "get_menu_catalog",
    "get_order_store",
    "reset_stores",
    "BaseMenuCatalog",
    "BaseOrderStore",
    "InMemoryMenuCatalog",
    "InMemoryOrderStore",
    "TimestampIdGenerator",
    "SAMPLE_MENU",
]
