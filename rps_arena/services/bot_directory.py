"""
Bot Directory - Remembers which connected players registered a bot name.

Answers "who's connected?" with the most recently registered bots so
bots can find each other and exchange direct messages.
"""

import logging
import threading
from typing import Dict, List, Optional

from rps_arena.config.game_settings import GameSettings, get_game_settings

logger = logging.getLogger(__name__)


class BotDirectory:
    """Registry of bot names keyed by player id, newest registration last."""

    def __init__(self, game_settings: Optional[GameSettings] = None):
        self.game_settings = game_settings or get_game_settings()
        self._names: Dict[str, str] = {}
        self._recent: List[str] = []
        self._lock = threading.Lock()

    def register_bot(self, player_id: str, name: str) -> None:
        """Register (or rename) the bot behind a player id."""
        with self._lock:
            self._names[player_id] = name
            if player_id in self._recent:
                self._recent.remove(player_id)
            self._recent.append(player_id)

            limit = self.game_settings.recent_bots_limit
            if len(self._recent) > limit:
                del self._recent[:len(self._recent) - limit]
        logger.info(f"Registered bot {name} ({player_id})")

    def unregister_bot(self, player_id: str) -> Optional[str]:
        """Forget a bot. Returns its name, or None if it never registered."""
        with self._lock:
            name = self._names.pop(player_id, None)
            if player_id in self._recent:
                self._recent.remove(player_id)
        if name is not None:
            logger.info(f"Unregistered bot {name} ({player_id})")
        return name

    def list_recent_bots(self) -> List[Dict[str, str]]:
        """Most recently registered bots, oldest first."""
        with self._lock:
            return [
                {'player_id': player_id, 'name': self._names[player_id]}
                for player_id in self._recent
            ]

    def describe_recent_bots(self) -> str:
        """Reply text for the "who's connected?" command."""
        bots = self.list_recent_bots()
        if not bots:
            return "Recent Connected bots: none"
        return "Recent Connected bots: " + ", ".join(
            f"{bot['name']} ({bot['player_id']})" for bot in bots
        )

    def get_bot_count(self) -> int:
        return len(self._names)
