"""
Session Phase Enumeration

Defines the lifecycle phases a game session moves through.
"""

from enum import Enum


class SessionPhase(Enum):
    """Session phase enumeration."""
    WAITING_FOR_PLAYERS = "waiting_for_players"
    READY_TO_START = "ready_to_start"
    IN_PROGRESS = "in_progress"
    ENDED = "ended"
