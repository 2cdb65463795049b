"""
FastAPI Application Entry Point

Realtime Order Backend - single restaurant, in-memory state,
room-based WebSocket sync between customers and staff.

Endpoints:
    - GET/POST /api/menu, PUT/DELETE /api/menu/{id}: Menu catalog
    - GET/POST /api/orders, GET /api/orders/{id}: Orders
    - PUT /api/orders/{id}/status: Lifecycle status change
    - GET /api/restaurant/stats: Aggregates and live connection counts
    - WS /ws: Realtime channel (joinRoom, trackOrder, toggleItemAvailability)
    - GET /health: System health check

Run:
    uvicorn orderhub.main:app --host 0.0.0.0 --port 8000
    python -m orderhub.main        # host/port from API_HOST / API_PORT

Version: 1.0.0
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

from fastapi import Depends, FastAPI, Request, WebSocket
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from orderhub.core.config import get_settings, setup_logging
from orderhub.core.exceptions import InternalError, OrderingError, ValidationError
from orderhub.schemas import (
    ErrorResponse,
    HealthResponse,
    MenuItemCreate,
    MenuItemUpdate,
    OrderStatusUpdate,
)
from orderhub.services.coordinator import OrderLifecycleCoordinator, get_coordinator
from orderhub.services.gateway import RealtimeGateway

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    if settings.is_production and "*" in settings.cors_origins_list:
        logger.warning("⚠️ CORS allows every origin in production")
    logger.info("=" * 60)

    coordinator = get_coordinator()
    logger.info(f"✅ Menu loaded: {len(coordinator.list_menu())} items")
    logger.info("📡 Realtime rooms: customer_room, restaurant_room")
    logger.info("✅ Application ready!")
    logger.info("=" * 60)

    yield

    logger.info("Shutting down...")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "Order lifecycle engine for a single restaurant with realtime "
        "customer and staff synchronization over WebSocket rooms."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


def _collection(items: list) -> dict[str, Any]:
    return {
        "success": True,
        "data": [item.to_dict() for item in items],
        "count": len(items),
    }


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"Welcome to {settings.restaurant_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "realtime": "/ws",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    coordinator: OrderLifecycleCoordinator = Depends(get_coordinator),
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(),
        uptime=round(time.monotonic() - STARTED_AT, 3),
        environment=settings.env_mode.value,
        connections=coordinator.router.connection_count,
    )


# =============================================================================
# MENU API ENDPOINTS
# =============================================================================

@app.get("/api/menu", tags=["Menu"], summary="Full Menu Catalog")
async def get_menu(
    coordinator: OrderLifecycleCoordinator = Depends(get_coordinator),
) -> dict[str, Any]:
    return _collection(coordinator.list_menu())


@app.post(
    "/api/menu",
    status_code=201,
    responses={400: {"model": ErrorResponse}},
    tags=["Menu"],
    summary="Add Menu Item",
)
async def add_menu_item(
    item: MenuItemCreate,
    coordinator: OrderLifecycleCoordinator = Depends(get_coordinator),
) -> dict[str, Any]:
    """Add an item; every client receives the refreshed menu."""
    created = await coordinator.add_menu_item(item.model_dump(by_alias=True))
    return {
        "success": True,
        "message": "Menu item added successfully",
        "data": created.to_dict(),
    }


@app.put(
    "/api/menu/{item_id}",
    responses={404: {"model": ErrorResponse}},
    tags=["Menu"],
    summary="Update Menu Item",
)
async def update_menu_item(
    item_id: int,
    patch: MenuItemUpdate,
    coordinator: OrderLifecycleCoordinator = Depends(get_coordinator),
) -> dict[str, Any]:
    """Merge the sent fields into the item."""
    updated = await coordinator.update_menu_item(item_id, patch.to_patch())
    return {
        "success": True,
        "message": "Menu item updated successfully",
        "data": updated.to_dict(),
    }


@app.delete(
    "/api/menu/{item_id}",
    responses={404: {"model": ErrorResponse}},
    tags=["Menu"],
    summary="Delete Menu Item",
)
async def delete_menu_item(
    item_id: int,
    coordinator: OrderLifecycleCoordinator = Depends(get_coordinator),
) -> dict[str, Any]:
    await coordinator.remove_menu_item(item_id)
    return {"success": True, "message": "Menu item deleted successfully"}


# =============================================================================
# ORDER API ENDPOINTS
# =============================================================================

@app.get("/api/orders", tags=["Orders"], summary="List Orders (newest first)")
async def list_orders(
    coordinator: OrderLifecycleCoordinator = Depends(get_coordinator),
) -> dict[str, Any]:
    return _collection(coordinator.list_orders())


@app.get(
    "/api/orders/{order_id}",
    responses={404: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def get_order(
    order_id: str,
    coordinator: OrderLifecycleCoordinator = Depends(get_coordinator),
) -> dict[str, Any]:
    """Get a specific order by ID."""
    return {"success": True, "data": coordinator.get_order(order_id).to_dict()}


@app.post(
    "/api/orders",
    status_code=201,
    responses={400: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Place Order",
)
async def create_order(
    request: Request,
    coordinator: OrderLifecycleCoordinator = Depends(get_coordinator),
) -> dict[str, Any]:
    """
    Place a new order.

    The raw body is validated rule by rule so that a 400 lists every
    violation. On success the restaurant room receives ``newOrder`` and
    the customer room ``orderConfirmed``.
    """
    try:
        payload = await request.json()
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError
        raise ValidationError(["Request body must be valid JSON"])

    order = await coordinator.create_order(payload)
    return {
        "success": True,
        "message": "Order placed successfully",
        "data": order.to_dict(),
    }


@app.put(
    "/api/orders/{order_id}/status",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Change Order Status",
)
async def update_order_status(
    order_id: str,
    body: OrderStatusUpdate,
    coordinator: OrderLifecycleCoordinator = Depends(get_coordinator),
) -> dict[str, Any]:
    """
    Move an order to any of the five lifecycle statuses.

    Backward moves (e.g. delivered -> pending) are accepted.
    """
    order = await coordinator.update_order_status(order_id, body.status)
    return {
        "success": True,
        "message": "Order status updated successfully",
        "data": order.to_dict(),
    }


# =============================================================================
# RESTAURANT ENDPOINTS
# =============================================================================

@app.get("/api/restaurant/stats", tags=["Restaurant"], summary="Restaurant Statistics")
async def restaurant_stats(
    coordinator: OrderLifecycleCoordinator = Depends(get_coordinator),
) -> dict[str, Any]:
    return {"success": True, "data": coordinator.restaurant_stats().to_dict()}


# =============================================================================
# REALTIME CHANNEL
# =============================================================================

@app.websocket("/ws")
async def realtime_channel(
    websocket: WebSocket,
    coordinator: OrderLifecycleCoordinator = Depends(get_coordinator),
) -> None:
    """
    One WebSocket per client. Frames are ``{"event": ..., "data": ...}``.
    """
    await websocket.accept()
    connection_id = uuid.uuid4().hex
    coordinator.router.connect(connection_id, websocket)
    gateway = RealtimeGateway(coordinator)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.info(f"🔌 {connection_id} closed (code={message.get('code')})")
                break
            if message.get("text") is not None:
                await gateway.handle_text(connection_id, message["text"])
            else:
                await gateway.handle_bytes(connection_id, message.get("bytes") or b"")
    finally:
        await coordinator.disconnect(connection_id)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(OrderingError)
async def ordering_error_handler(request: Request, exc: OrderingError) -> JSONResponse:
    """Domain errors carry their own status and body."""
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies use the same envelope as order validation."""
    errors = [
        f"{'.'.join(str(p) for p in err['loc'] if p != 'body')}: {err['msg']}"
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=ValidationError(errors).to_dict(),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    error = InternalError()
    content = error.to_dict()
    content["error"] = str(exc) if settings.expose_error_details else "An unexpected error occurred"
    return JSONResponse(status_code=error.status_code, content=content)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "orderhub.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
