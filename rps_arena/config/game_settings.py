"""
Game Settings Configuration Module

Provides centralized access to game-specific configuration values,
falling back to defaults when application configuration is not loaded.
"""

import logging

logger = logging.getLogger(__name__)

# Rock/paper/scissors is strictly a two-player game
SESSION_CAPACITY = 2


class GameSettings:
    """Centralized game settings management."""

    def __init__(self, app_config=None):
        """
        Initialize game settings.

        Args:
            app_config: Application configuration instance from config_factory
        """
        self._config = app_config
        if app_config is None:
            try:
                from config_factory import get_config
                self._config = get_config()
            except (ImportError, Exception) as e:
                logger.warning(f"Could not load configuration: {e}, using defaults")
                self._config = None

    @property
    def session_capacity(self) -> int:
        """Number of seats in a session."""
        return SESSION_CAPACITY

    @property
    def continuous_play(self) -> bool:
        """
        Whether players are put back into matchmaking after a round ends
        or after their opponent leaves.
        """
        if self._config is None:
            return True  # Fallback default

        return self._config.continuous_play

    @property
    def overwrite_moves(self) -> bool:
        """
        Whether a second move in the same round replaces the first.

        Returns:
            True for the 'overwrite' policy, False for 'ignore'
        """
        if self._config is None:
            return True  # Fallback default

        return self._config.move_resubmission_policy == 'overwrite'

    @property
    def recent_bots_limit(self) -> int:
        """Number of most recently registered bots listed by the bot directory."""
        if self._config is None:
            return 10  # Fallback default

        return self._config.recent_bots_limit

    @property
    def max_bot_name_length(self) -> int:
        if self._config is None:
            return 50  # Fallback default

        return self._config.max_bot_name_length


# Global instance for easy access
_game_settings_instance = None


def get_game_settings(app_config=None) -> GameSettings:
    """
    Get or create the global game settings instance.

    Args:
        app_config: Optional app config to use

    Returns:
        GameSettings instance
    """
    global _game_settings_instance

    if _game_settings_instance is None or app_config is not None:
        _game_settings_instance = GameSettings(app_config)

    return _game_settings_instance


def reset_game_settings():
    """Reset the global game settings instance (mainly for testing)."""
    global _game_settings_instance
    _game_settings_instance = None
