"""
Notifier test doubles and directory builders.
Provides a notifier that records every message instead of sending it.
"""

from unittest.mock import Mock

from config_factory import AppConfig
from rps_arena.config.game_settings import GameSettings
from rps_arena.core.outcome_resolver import RockPaperScissorsResolver
from rps_arena.services.notifier import Notifier
from rps_arena.session_directory import SessionDirectory


class RecordingNotifier(Notifier):
    """Notifier that keeps (player_id, text) pairs in delivery order."""

    def __init__(self, connected=None):
        self.connected = set(connected or [])
        self.sent = []
        self.reachable_all = connected is None

    def connected_player_ids(self):
        return sorted(self.connected)

    def send_to(self, player_id, text):
        if not self.reachable_all and player_id not in self.connected:
            return False
        self.sent.append((player_id, text))
        return True

    def messages_for(self, player_id):
        """All texts delivered to one player, oldest first."""
        return [text for recipient, text in self.sent if recipient == player_id]

    def last_message_for(self, player_id):
        messages = self.messages_for(player_id)
        return messages[-1] if messages else None

    def clear(self):
        self.sent.clear()


def create_mock_socketio():
    """Create a mock SocketIO object exposing `send`.

    Returns:
        Mock: A mock SocketIO object
    """
    mock_socketio = Mock()
    mock_socketio.send = Mock()
    return mock_socketio


def make_game_settings(continuous_play=True, move_resubmission_policy='overwrite', recent_bots_limit=10):
    """GameSettings backed by an explicit AppConfig."""
    return GameSettings(AppConfig(
        continuous_play=continuous_play,
        move_resubmission_policy=move_resubmission_policy,
        recent_bots_limit=recent_bots_limit
    ))


def make_directory(notifier=None, **settings):
    """SessionDirectory with a recording notifier and the given game settings."""
    return SessionDirectory(
        RockPaperScissorsResolver(),
        notifier if notifier is not None else RecordingNotifier(),
        game_settings=make_game_settings(**settings)
    )
