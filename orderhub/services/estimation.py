"""
Preparation Time Estimate

Workload model: every line contributes quantity x the menu item's
preparation time; the summed workload is halved (two cooks on the line),
rounded up, added to a fixed base and clamped into a sane window.

    estimate = clamp(base + ceil(sum(qty * prep) / 2), min, max)

Version: 1.0.0
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from orderhub.core.config import get_settings
from orderhub.models import MenuItem

MenuLookup = Callable[[int], Optional[MenuItem]]


@dataclass(frozen=True)
class EstimationPolicy:
    """Constants for the estimate, in minutes."""
    default_minutes: int = 30
    base_minutes: int = 15
    fallback_item_minutes: int = 10
    min_minutes: int = 15
    max_minutes: int = 60

    @classmethod
    def from_settings(cls) -> "EstimationPolicy":
        settings = get_settings()
        return cls(
            default_minutes=settings.estimate_default_minutes,
            base_minutes=settings.estimate_base_minutes,
            fallback_item_minutes=settings.estimate_fallback_item_minutes,
            min_minutes=settings.estimate_min_minutes,
            max_minutes=settings.estimate_max_minutes,
        )

    def _item_minutes(self, line: Any, lookup: MenuLookup) -> int:
        item_id = _field(line, "id")
        menu_item = lookup(item_id) if isinstance(item_id, int) else None
        if menu_item is None:
            return self.fallback_item_minutes
        return menu_item.preparation_time

    def estimate(
        self,
        lines: Optional[Iterable[Any]],
        lookup: MenuLookup,
    ) -> int:
        """
        Estimate preparation time for an order.

        Args:
            lines: Order lines (dicts or OrderLine models)
            lookup: Resolves a menu item id to the current MenuItem

        Returns:
            Minutes, within [min_minutes, max_minutes]
        """
        lines = list(lines or [])
        if not lines:
            return self.default_minutes

        workload = sum(
            self._item_minutes(line, lookup) * (_field(line, "quantity") or 0)
            for line in lines
        )
        minutes = self.base_minutes + math.ceil(workload / 2)
        return min(max(minutes, self.min_minutes), self.max_minutes)


def _field(line: Any, name: str) -> Any:
    if isinstance(line, dict):
        return line.get(name)
    return getattr(line, name, None)
