"""
Pydantic Schemas for Request/Response Validation

Order creation deliberately takes the raw JSON body (see
services.validation) so that every violation can be reported at once;
the schemas here cover menu writes, status updates and responses.

Version: 1.0.0
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from orderhub.models import CamelModel, ConnectionStats, Number


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class MenuItemCreate(CamelModel):
    """Request schema for adding a menu item."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    name: str = Field(..., min_length=1, max_length=100, examples=["Gulab Jamun"])
    category: str = Field(default="general", examples=["sweets"])
    price: Number = Field(..., examples=[120])
    description: str = Field(default="", max_length=500)
    emoji: Optional[str] = Field(None, examples=["🍯"])
    rating: float = Field(default=0.0, ge=0, le=5)
    popular: bool = False
    premium: bool = False
    preparation_time: int = Field(default=10, gt=0, examples=[15])

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: Number) -> Number:
        if v <= 0:
            raise ValueError("price must be a positive number")
        return v


class MenuItemUpdate(CamelModel):
    """Partial update; only the fields sent are merged."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[str] = None
    price: Optional[Number] = None
    description: Optional[str] = Field(None, max_length=500)
    emoji: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    popular: Optional[bool] = None
    premium: Optional[bool] = None
    available: Optional[bool] = None
    preparation_time: Optional[int] = Field(None, gt=0)

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: Optional[Number]) -> Optional[Number]:
        if v is not None and v <= 0:
            raise ValueError("price must be a positive number")
        return v

    def to_patch(self) -> dict[str, Any]:
        """Only the fields the client actually sent, camelCase keyed."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class OrderStatusUpdate(CamelModel):
    """Body of PUT /api/orders/{id}/status. Checked against the enum later."""
    status: Optional[str] = Field(None, examples=["preparing"])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class RestaurantStats(CamelModel):
    """Dashboard aggregates plus live connection counts."""
    total_orders: int
    today_orders: int
    pending_orders: int
    completed_orders: int
    total_revenue: Number
    today_revenue: Number
    connected_users: ConnectionStats


class ErrorResponse(CamelModel):
    """Standard error response."""
    success: bool = False
    message: str
    errors: Optional[List[str]] = None
    error: Optional[str] = None


class HealthResponse(CamelModel):
    """Health check response."""
    status: str
    timestamp: datetime
    uptime: float
    environment: str
    connections: int
