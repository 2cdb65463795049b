"""
Order Payload Validation and Sanitization

Inbound order payloads arrive as loosely typed JSON. ``validate_order``
checks every rule independently and returns all violations at once so the
client can fix its request in one round trip. ``sanitize`` strips markup
from free text before anything is stored.

Version: 1.0.0
"""

import re
from typing import Any

_SCRIPT_BLOCK = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>",
    re.IGNORECASE,
)
_ANGLE_BRACKETS = re.compile(r"[<>]")


def sanitize(text: Any) -> Any:
    """
    Remove script blocks and angle brackets, then trim.

    Non-string values are returned unchanged.

    Example:
        >>> sanitize("<script>alert(1)</script>Hello")
        'Hello'
    """
    if not isinstance(text, str):
        return text
    text = _SCRIPT_BLOCK.sub("", text)
    text = _ANGLE_BRACKETS.sub("", text)
    return text.strip()


def is_positive_number(value: Any) -> bool:
    # bool is an int subclass; JSON true is not a number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value > 0


def validate_order(payload: Any) -> list[str]:
    """
    Check an order payload against structural and business rules.

    Args:
        payload: Raw decoded JSON body

    Returns:
        List of violation messages (empty when valid)
    """
    if not isinstance(payload, dict):
        return ["Order payload must be an object"]

    errors: list[str] = []

    items = payload.get("items")
    if not isinstance(items, list) or not items:
        errors.append("Items are required and must be a non-empty array")

    if not is_positive_number(payload.get("total")):
        errors.append("Total must be a positive number")

    customer = payload.get("customerInfo")
    name = customer.get("name") if isinstance(customer, dict) else None
    if not name or not isinstance(name, str) or not sanitize(name):
        errors.append("Customer name is required")

    if isinstance(items, list):
        for index, item in enumerate(items, start=1):
            if not isinstance(item, dict):
                errors.append(f"Item {index}: must be an object")
                continue
            item_name = item.get("name")
            if not item_name or not isinstance(item_name, str) or not sanitize(item_name):
                errors.append(f"Item {index}: name is required")
            if not is_positive_number(item.get("price")):
                errors.append(f"Item {index}: price must be a positive number")
            if not is_positive_number(item.get("quantity")):
                errors.append(f"Item {index}: quantity must be a positive number")

    return errors
