"""Tests for the preparation time estimate."""

from typing import Optional

from orderhub.models import MenuItem
from orderhub.services.estimation import EstimationPolicy

MENU = {
    1: MenuItem(id=1, name="Rasgulla", price=100, preparation_time=10),
    2: MenuItem(id=2, name="Thali", price=250, preparation_time=25),
}


def lookup(item_id: int) -> Optional[MenuItem]:
    return MENU.get(item_id)


def test_empty_order_gets_default():
    policy = EstimationPolicy()

    assert policy.estimate([], lookup) == 30
    assert policy.estimate(None, lookup) == 30


def test_single_line_quantity_two():
    policy = EstimationPolicy()

    minutes = policy.estimate([{"id": 1, "quantity": 2}], lookup)

    # 15 base + ceil(2 * 10 / 2)
    assert minutes == 25
    assert policy.min_minutes <= minutes <= policy.max_minutes


def test_fractional_workload_rounds_up():
    policy = EstimationPolicy()

    assert policy.estimate([{"id": 2, "quantity": 1}], lookup) == 15 + 13


def test_unknown_item_uses_fallback():
    policy = EstimationPolicy()

    assert policy.estimate([{"id": 999, "quantity": 1}], lookup) == 20
    assert policy.estimate([{"name": "Chai", "quantity": 1}], lookup) == 20


def test_workload_is_summed_across_lines():
    policy = EstimationPolicy()

    lines = [{"id": 1, "quantity": 1}, {"id": 2, "quantity": 1}]

    assert policy.estimate(lines, lookup) == 15 + 18


def test_estimate_is_clamped_to_ceiling():
    policy = EstimationPolicy()

    assert policy.estimate([{"id": 2, "quantity": 40}], lookup) == 60


def test_custom_bounds():
    policy = EstimationPolicy(base_minutes=0, min_minutes=20, max_minutes=45)

    assert policy.estimate([{"id": 1, "quantity": 1}], lookup) == 20
