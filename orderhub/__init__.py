"""
                Realtime Order Backend

In-memory order lifecycle engine for a single restaurant with a
room-based WebSocket channel that keeps customers and staff in sync.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
