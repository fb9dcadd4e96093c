"""
Matchmaker for RPS Arena

FIFO queue of sessions that are still waiting for a second participant.
The SessionDirectory decides when ids enter and leave the queue; callers
are expected to hold the directory lock.
"""

import logging
from collections import deque
from typing import Deque, List, Optional

logger = logging.getLogger(__name__)


class Matchmaker:
    """Queue of session ids short one participant, oldest first."""

    def __init__(self):
        self._waiting: Deque[str] = deque()

    def enqueue(self, session_id: str) -> bool:
        """
        Append a session to the back of the queue.

        Returns:
            True if queued, False if it was already waiting
        """
        if session_id in self._waiting:
            logger.debug(f"Session {session_id} is already waiting for an opponent")
            return False

        self._waiting.append(session_id)
        logger.debug(f"Session {session_id} queued for matchmaking ({len(self._waiting)} waiting)")
        return True

    def dequeue_or_none(self) -> Optional[str]:
        """Pop the oldest waiting session id, or None if nobody is waiting."""
        if not self._waiting:
            return None
        return self._waiting.popleft()

    def discard(self, session_id: str) -> bool:
        """Remove a session that filled up or was torn down."""
        try:
            self._waiting.remove(session_id)
        except ValueError:
            return False

        logger.debug(f"Session {session_id} removed from matchmaking")
        return True

    def snapshot(self) -> List[str]:
        return list(self._waiting)

    def clear(self) -> None:
        self._waiting.clear()

    def __len__(self) -> int:
        return len(self._waiting)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._waiting
