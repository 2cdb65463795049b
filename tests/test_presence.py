"""Tests for the presence registry."""

from orderhub.models import UserRole
from orderhub.services.realtime import PresenceRegistry


def test_join_places_connection_in_role_room():
    presence = PresenceRegistry()

    entry, previous = presence.join("c1", UserRole.CUSTOMER, "u-1")

    assert previous is None
    assert entry.room_name == "customer_room"
    assert presence.members("customer_room") == ["c1"]


def test_rejoin_switches_rooms_without_overlap():
    presence = PresenceRegistry()
    presence.join("c1", UserRole.CUSTOMER)

    entry, previous = presence.join("c1", UserRole.RESTAURANT)

    assert previous.room_name == "customer_room"
    assert entry.room_name == "restaurant_room"
    assert presence.members("customer_room") == []
    assert presence.members("restaurant_room") == ["c1"]
    assert len(presence) == 1


def test_leave_removes_entry():
    presence = PresenceRegistry()
    presence.join("c1", UserRole.CUSTOMER)

    assert presence.leave("c1").role == UserRole.CUSTOMER
    assert "c1" not in presence
    assert presence.leave("c1") is None


def test_stats_counts_roles_and_rooms():
    presence = PresenceRegistry()
    presence.join("c1", UserRole.CUSTOMER)
    presence.join("c2", UserRole.CUSTOMER)
    presence.join("r1", UserRole.RESTAURANT)

    stats = presence.stats().to_dict()

    assert stats == {
        "customers": 2,
        "restaurants": 1,
        "total": 3,
        "rooms": {"customer_room": 2, "restaurant_room": 1},
    }
