"""
Core error definitions for RPS Arena

Provides error codes, the handler-level validation exception and the
exceptions raised by the Session entity when it is misused.
"""

from enum import Enum
from typing import Dict, Optional


class ErrorCode(Enum):
    """Standardized error codes for the application."""

    # Lookup errors (always safe no-ops at the directory level)
    NOT_FOUND = "NOT_FOUND"
    NOT_SEATED = "NOT_SEATED"

    # Lifecycle errors
    INVALID_TRANSITION = "INVALID_TRANSITION"
    GAME_NOT_STARTED = "GAME_NOT_STARTED"
    SESSION_FULL = "SESSION_FULL"

    # Input errors
    INVALID_DATA = "INVALID_DATA"
    INVALID_MOVE = "INVALID_MOVE"
    INVALID_BOT_NAME = "INVALID_BOT_NAME"

    # Delivery errors
    NOTIFIER_FAILURE = "NOTIFIER_FAILURE"

    # System Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ValidationError(Exception):
    """Custom exception for validation errors."""

    def __init__(self, code: ErrorCode, message: str, details: Optional[Dict] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class SessionError(Exception):
    """Base class for errors raised by a Session on invalid use."""

    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, session_id: str, message: str):
        self.session_id = session_id
        self.message = message
        super().__init__(f"Session {session_id}: {message}")


class NotAParticipantError(SessionError):
    """Raised when a move is submitted by a player who is not seated."""

    code = ErrorCode.NOT_SEATED


class InvalidTransitionError(SessionError):
    """Raised when a phase transition is not allowed from the current phase."""

    code = ErrorCode.INVALID_TRANSITION


class SessionFullError(SessionError):
    """Raised when adding a participant to a session with no free seat."""

    code = ErrorCode.SESSION_FULL
