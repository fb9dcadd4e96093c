"""
Connection Registry - Tracks which players currently hold a Socket.IO connection.

This service handles:
- Registering a player id when a client connects
- Forgetting it again on disconnect
- Answering "is this player reachable?" for the notifier
"""

import logging
import threading
from datetime import datetime
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """Owned registry of live player connections, created once per process."""

    def __init__(self):
        """Initialize the connection registry."""
        # player_id -> connection info
        self._connections: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()
        logger.info("ConnectionRegistry initialized")

    def add_connection(self, player_id: str) -> None:
        """Register a connected player.

        Args:
            player_id: Opaque per-connection player identifier
        """
        with self._lock:
            self._connections[player_id] = {
                'player_id': player_id,
                'connected_at': datetime.now()
            }
        logger.debug(f"Added connection for player: {player_id}")

    def remove_connection(self, player_id: str) -> Optional[Dict[str, Any]]:
        """Forget a player's connection.

        Args:
            player_id: Player identifier

        Returns:
            The removed connection info or None if not found
        """
        with self._lock:
            connection_info = self._connections.pop(player_id, None)
        if connection_info:
            logger.debug(f"Removed connection for player: {player_id}")
        return connection_info

    def has_connection(self, player_id: str) -> bool:
        return player_id in self._connections

    def get_connection(self, player_id: str) -> Optional[Dict[str, Any]]:
        return self._connections.get(player_id)

    def get_player_ids(self) -> List[str]:
        """Get every connected player id in connection order."""
        with self._lock:
            return list(self._connections.keys())

    def get_connection_count(self) -> int:
        return len(self._connections)

    def clear(self) -> None:
        """Forget every connection (used at shutdown and in tests)."""
        with self._lock:
            self._connections.clear()
