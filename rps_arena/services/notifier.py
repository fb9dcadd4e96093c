"""
Notifier - Delivers text messages to players over Socket.IO.

This service handles:
- Messages to a single player
- Messages to a group of players
- Direct messages tagged with the sender's id
- Broadcasts to every connected player

Delivery failures are logged and reported as False; they never raise.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable

from rps_arena.core.errors import ErrorCode

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Message delivery interface consumed by the session directory."""

    @abstractmethod
    def send_to(self, player_id: str, text: str) -> bool:
        """Send text to one player. Returns True if it was handed to the transport."""

    @abstractmethod
    def connected_player_ids(self) -> Iterable[str]:
        """Players that can currently be reached."""

    def send_to_all(self, player_ids: Iterable[str], text: str) -> int:
        """Send text to several players. Returns the number of successful sends."""
        return sum(1 for player_id in list(player_ids) if self.send_to(player_id, text))

    def send_direct(self, from_id: str, to_id: str, text: str) -> bool:
        """Send text from one player to another, tagged with the sender."""
        return self.send_to(to_id, f"from: {from_id}, message: {text}")

    def broadcast(self, text: str) -> int:
        """Send text to every connected player."""
        return self.send_to_all(self.connected_player_ids(), text)


class SocketIONotifier(Notifier):
    """Notifier backed by Flask-SocketIO's plain text `message` event."""

    def __init__(self, socketio, connection_registry):
        """Initialize the notifier.

        Args:
            socketio: Flask-SocketIO instance used to send messages
            connection_registry: Registry of currently connected players
        """
        self.socketio = socketio
        self.connection_registry = connection_registry

    def connected_player_ids(self):
        return self.connection_registry.get_player_ids()

    def send_to(self, player_id: str, text: str) -> bool:
        if not self.connection_registry.has_connection(player_id):
            logger.warning(f'No connection found for player {player_id}. Unable to send message.')
            return False

        try:
            self.socketio.send(text, to=player_id)
            logger.debug(f'Message sent to player {player_id}: {text}')
            return True
        except Exception as e:
            logger.error(f'{ErrorCode.NOTIFIER_FAILURE.value}: error sending message to player {player_id}: {e}')
            return False
