"""
Presence Registry

Tracks which joined connection plays which role and therefore sits in
which room. Room membership is derived from the single entry per
connection, so a connection is never in two rooms at once: re-joining
replaces the entry in one assignment.
"""

from datetime import datetime
from typing import Callable, Optional

from orderhub.models import (
    ROOMS,
    ConnectionEntry,
    ConnectionStats,
    RoomCounts,
    UserRole,
)


class PresenceRegistry:
    """One ConnectionEntry per joined connection."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock
        self._entries: dict[str, ConnectionEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, connection_id: str) -> bool:
        return connection_id in self._entries

    def join(
        self,
        connection_id: str,
        role: UserRole,
        user_id: Optional[str] = None,
    ) -> tuple[ConnectionEntry, Optional[ConnectionEntry]]:
        """
        Register (or re-register) a connection.

        Returns:
            (new entry, entry it replaced or None)
        """
        previous = self._entries.get(connection_id)
        entry = ConnectionEntry(
            connection_id=connection_id,
            role=role,
            user_id=user_id,
            room_name=role.room_name,
            joined_at=self._clock(),
        )
        self._entries[connection_id] = entry
        return entry, previous

    def leave(self, connection_id: str) -> Optional[ConnectionEntry]:
        """Drop a connection. Returns the removed entry, if it had joined."""
        return self._entries.pop(connection_id, None)

    def get(self, connection_id: str) -> Optional[ConnectionEntry]:
        return self._entries.get(connection_id)

    def members(self, room_name: str) -> list[str]:
        return [
            cid for cid, entry in self._entries.items()
            if entry.room_name == room_name
        ]

    def stats(self) -> ConnectionStats:
        entries = list(self._entries.values())
        customers = sum(1 for e in entries if e.role == UserRole.CUSTOMER)
        restaurants = sum(1 for e in entries if e.role == UserRole.RESTAURANT)
        rooms = {room: len(self.members(room)) for room in ROOMS}
        return ConnectionStats(
            customers=customers,
            restaurants=restaurants,
            total=len(entries),
            rooms=RoomCounts(**rooms),
        )
