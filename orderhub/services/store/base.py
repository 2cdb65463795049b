"""
Store Abstract Base Classes

Defines the interface contract for the order store and the menu catalog.
The in-memory implementations are the only ones shipped; a durable
backend only has to honour these methods and the invariants below.

Invariants:
    - Orders are listed newest first and are never deleted
    - order_number and created_at grow with insertion order
    - Order and menu ids are unique and never reused
    - A failed call never leaves a partial record behind

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

from orderhub.models import MenuItem, Order, OrderStats


class BaseMenuCatalog(ABC):
    """Abstract base class for menu catalogs."""

    @abstractmethod
    def list(self) -> list[MenuItem]:
        """Return every menu item in insertion order."""
        pass

    @abstractmethod
    def get(self, item_id: int) -> Optional[MenuItem]:
        """Return the item with this id, or None."""
        pass

    @abstractmethod
    def add(self, data: dict[str, Any]) -> MenuItem:
        """Create an item with a freshly assigned id."""
        pass

    @abstractmethod
    def update(self, item_id: int, patch: dict[str, Any]) -> MenuItem:
        """Merge ``patch`` into the item. Raises NotFoundError."""
        pass

    @abstractmethod
    def remove(self, item_id: int) -> MenuItem:
        """Hard-delete the item. Raises NotFoundError."""
        pass

    @abstractmethod
    def set_availability(self, item_id: int, available: bool) -> MenuItem:
        """Toggle the availability flag. Raises NotFoundError."""
        pass


class BaseOrderStore(ABC):
    """Abstract base class for order stores."""

    @abstractmethod
    def create(self, payload: dict[str, Any]) -> Order:
        """
        Validate, sanitize and insert a new order.

        Raises:
            ValidationError: payload breaks a rule; nothing is inserted
        """
        pass

    @abstractmethod
    def get(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    def list(self) -> list[Order]:
        """Return all orders, newest first."""
        pass

    @abstractmethod
    def set_status(self, order_id: str, status: str) -> Order:
        """
        Move an order to ``status``.

        Raises:
            InvalidTransitionError: status outside the closed enum
            NotFoundError: unknown order id
        """
        pass

    @abstractmethod
    def stats(self, now: Optional[datetime] = None) -> OrderStats:
        """Aggregate counts, recomputed from the full collection."""
        pass

    @abstractmethod
    def count(self) -> int:
        pass
