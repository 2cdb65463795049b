"""
Realtime Channel Event Schemas

Every WebSocket frame, in both directions, is a JSON envelope:

    {"event": "<name>", "data": <payload>}

Inbound frames are parsed into a tagged union keyed on ``event`` and
validated before any handler sees them. Outbound event names are fixed.

Inbound events:
    - joinRoom: {userType: customer|restaurant, userId?}
    - trackOrder: "<orderId>" or {orderId}
    - toggleItemAvailability: {itemId, available}
    - test: anything, echoed back

Version: 1.0.0
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from orderhub.models import CamelModel, UserRole


class OutboundEvent(str, Enum):
    """Event names the server emits."""
    CONNECTED = "connected"
    CONNECTION_STATS = "connectionStats"
    NEW_ORDER = "newOrder"
    ORDER_CONFIRMED = "orderConfirmed"
    ORDER_STATUS_UPDATE = "orderStatusUpdate"
    ORDER_TRACKING_UPDATE = "orderTrackingUpdate"
    ORDER_NOT_FOUND = "orderNotFound"
    MENU_UPDATED = "menuUpdated"
    TEST_RESPONSE = "testResponse"
    ERROR = "error"
    # Instrumentation notices, sent to everyone
    ORDER_CREATED = "orderCreated"
    ORDER_STATUS_CHANGED = "orderStatusChanged"


def event_name(event: Union[OutboundEvent, str]) -> str:
    return event.value if isinstance(event, OutboundEvent) else event


def envelope(event: Union[OutboundEvent, str], data: Any) -> dict[str, Any]:
    """Wrap a payload in the wire envelope."""
    return {"event": event_name(event), "data": data}


# =============================================================================
# INBOUND PAYLOADS
# =============================================================================

class JoinRoomData(CamelModel):
    user_type: UserRole
    user_id: Optional[str] = None

    @field_validator("user_id", mode="before")
    @classmethod
    def coerce_user_id(cls, v: Any) -> Optional[str]:
        if v is None or isinstance(v, str):
            return v
        return str(v)


class TrackOrderData(CamelModel):
    order_id: str


class ToggleAvailabilityData(CamelModel):
    item_id: int
    available: bool


# =============================================================================
# INBOUND EVENTS
# =============================================================================

class JoinRoomEvent(BaseModel):
    event: Literal["joinRoom"]
    data: JoinRoomData


class TrackOrderEvent(BaseModel):
    event: Literal["trackOrder"]
    data: Union[str, TrackOrderData]

    @property
    def order_id(self) -> str:
        return self.data if isinstance(self.data, str) else self.data.order_id


class ToggleAvailabilityEvent(BaseModel):
    event: Literal["toggleItemAvailability"]
    data: ToggleAvailabilityData


class EchoEvent(BaseModel):
    event: Literal["test"]
    data: Any = None


InboundEvent = Annotated[
    Union[JoinRoomEvent, TrackOrderEvent, ToggleAvailabilityEvent, EchoEvent],
    Field(discriminator="event"),
]

INBOUND_EVENT_NAMES = ("joinRoom", "trackOrder", "toggleItemAvailability", "test")

_inbound_adapter: TypeAdapter = TypeAdapter(InboundEvent)


def parse_inbound(raw: Any) -> Union[
    JoinRoomEvent, TrackOrderEvent, ToggleAvailabilityEvent, EchoEvent
]:
    """
    Validate a decoded frame into its event model.

    Raises:
        pydantic.ValidationError: unknown event name or bad payload
    """
    return _inbound_adapter.validate_python(raw)
