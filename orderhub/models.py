"""
Domain Models

Entities held by the order engine. Field names are snake_case in Python
and camelCase on the wire (orderNumber, customerInfo, preparationTime...).

    - MenuItem: catalog entry, mutated in place by menu operations
    - OrderLine: immutable snapshot of a line at order time
    - Order: lifecycle entity, only status/updated_at ever change
    - ConnectionEntry: presence record of a joined realtime connection

Version: 1.0.0
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Monetary amounts and quantities keep the int/float type the client sent
Number = Union[int, float]
# Free-text contact fields; clients sometimes send phone numbers as JSON numbers
TextOrNumber = Union[str, int, float]


class OrderStatus(str, Enum):
    """Order lifecycle status. Closed set, any-to-any transitions allowed."""
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


class UserRole(str, Enum):
    """Role a realtime connection joins as."""
    CUSTOMER = "customer"
    RESTAURANT = "restaurant"

    @property
    def room_name(self) -> str:
        return f"{self.value}_room"


CUSTOMER_ROOM = UserRole.CUSTOMER.room_name
RESTAURANT_ROOM = UserRole.RESTAURANT.room_name
ROOMS = (CUSTOMER_ROOM, RESTAURANT_ROOM)


class CamelModel(BaseModel):
    """Base for models serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# MENU
# =============================================================================

class MenuItem(CamelModel):
    """A catalog entry. Soft-deleted by setting available=False."""
    id: int
    name: str
    category: str = "general"
    price: Number
    description: str = ""
    emoji: Optional[str] = None
    rating: float = 0.0
    popular: bool = False
    premium: bool = False
    available: bool = True
    preparation_time: int = Field(default=10, gt=0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: Number) -> Number:
        if v <= 0:
            raise ValueError("price must be a positive number")
        return v


# =============================================================================
# ORDERS
# =============================================================================

class OrderLine(CamelModel):
    """Line item captured at order time; never follows later menu edits."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: Optional[int] = None
    name: str
    price: Number
    quantity: Number


class CustomerAddress(CamelModel):
    """Delivery address. Unknown keys from the client are kept as-is."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow"
    )

    full_address: Optional[TextOrNumber] = None


class CustomerInfo(CamelModel):
    name: str
    phone: Optional[TextOrNumber] = None
    address: Optional[CustomerAddress] = None


class Order(CamelModel):
    """
    A placed order.

    Identity is ``ORD<creation-ms>``; ``order_number`` is the store size at
    creation plus one. Only ``status`` and ``updated_at`` change after
    creation.
    """
    id: str
    order_number: int
    items: list[OrderLine]
    total: Number
    customer_info: CustomerInfo
    payment_method: TextOrNumber
    delivery_charge: Number = 0
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime
    updated_at: Optional[datetime] = None
    estimated_time: int


class OrderStats(CamelModel):
    """Aggregates over the full order collection."""
    total: int = 0
    created_today: int = 0
    pending: int = 0
    delivered: int = 0
    total_revenue: Number = 0
    today_revenue: Number = 0


# =============================================================================
# PRESENCE
# =============================================================================

class ConnectionEntry(CamelModel):
    """Presence record for one joined connection."""
    connection_id: str
    role: UserRole
    user_id: Optional[str] = None
    room_name: str
    joined_at: datetime


class RoomCounts(BaseModel):
    customer_room: int = 0
    restaurant_room: int = 0


class ConnectionStats(CamelModel):
    """Live connection counts broadcast on every membership change."""
    customers: int = 0
    restaurants: int = 0
    total: int = 0
    rooms: RoomCounts = Field(default_factory=RoomCounts)
