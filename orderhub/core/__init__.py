"""
Core module initialization.
Exports configuration, logging utilities and the error hierarchy.
"""

from orderhub.core.config import get_settings, Settings, EnvironmentMode
from orderhub.core.exceptions import (
    OrderingError,
    ValidationError,
    NotFoundError,
    InvalidTransitionError,
    InternalError,
)

__all__ = [
    "get_settings",
    "Settings",
    "EnvironmentMode",
    "OrderingError",
    "ValidationError",
    "NotFoundError",
    "InvalidTransitionError",
    "InternalError",
]
