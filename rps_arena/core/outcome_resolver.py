"""
Outcome Resolution for RPS Arena

A resolver turns the two moves of a finished round into one result per
participant. The SessionDirectory only depends on the OutcomeResolver
interface, so other simultaneous-move games can be plugged in.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Hashable, Mapping, Optional, Tuple


class Outcome(Enum):
    """Result of a round from one participant's point of view."""
    WIN = "win"
    LOSE = "lose"
    DRAW = "draw"


class Move(Enum):
    """Rock/paper/scissors moves."""
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"


@dataclass(frozen=True)
class RoundResult:
    """A participant's view of a resolved round."""
    player_id: str
    outcome: Outcome
    opponent_move: Hashable
    session_id: str

    def to_dict(self) -> Dict[str, Any]:
        opponent_move = self.opponent_move.value if isinstance(self.opponent_move, Enum) else self.opponent_move
        return {
            "player_id": self.player_id,
            "outcome": self.outcome.value,
            "opponent_move": opponent_move,
            "session_id": self.session_id,
        }


class OutcomeResolver(ABC):
    """Strategy mapping a two-player round to per-player results."""

    @property
    @abstractmethod
    def moves(self) -> Tuple[str, ...]:
        """Move tokens players may send for this game type."""

    @abstractmethod
    def parse_move(self, token: str) -> Optional[Hashable]:
        """Convert a normalized token into a move, or None if it is not one."""

    @abstractmethod
    def outcome_for(self, move: Hashable, opponent_move: Hashable) -> Outcome:
        """Outcome for the player who played `move` against `opponent_move`."""

    def describe_moves(self) -> str:
        """Human readable list of moves, e.g. "'rock', 'paper', or 'scissors'"."""
        quoted = [f"'{move}'" for move in self.moves]
        if len(quoted) == 1:
            return quoted[0]
        if len(quoted) == 2:
            return f"{quoted[0]} or {quoted[1]}"
        return f"{', '.join(quoted[:-1])}, or {quoted[-1]}"

    def resolve(self, session_id: str, moves: Mapping[str, Hashable]) -> Dict[str, RoundResult]:
        """
        Resolve a round.

        Args:
            session_id: Session the round belongs to
            moves: Mapping of the two participants to their moves

        Returns:
            Mapping of player id to that player's RoundResult

        Raises:
            ValueError: If the round does not have exactly two moves
        """
        if len(moves) != 2:
            raise ValueError(f"Session {session_id}: expected 2 moves, got {len(moves)}")

        (first_id, first_move), (second_id, second_move) = moves.items()
        return {
            first_id: RoundResult(
                player_id=first_id,
                outcome=self.outcome_for(first_move, second_move),
                opponent_move=second_move,
                session_id=session_id,
            ),
            second_id: RoundResult(
                player_id=second_id,
                outcome=self.outcome_for(second_move, first_move),
                opponent_move=first_move,
                session_id=session_id,
            ),
        }


class RockPaperScissorsResolver(OutcomeResolver):
    """Rock beats scissors, scissors beats paper, paper beats rock."""

    OUTCOMES = {
        Move.ROCK: {Move.ROCK: Outcome.DRAW, Move.PAPER: Outcome.LOSE, Move.SCISSORS: Outcome.WIN},
        Move.PAPER: {Move.ROCK: Outcome.WIN, Move.PAPER: Outcome.DRAW, Move.SCISSORS: Outcome.LOSE},
        Move.SCISSORS: {Move.ROCK: Outcome.LOSE, Move.PAPER: Outcome.WIN, Move.SCISSORS: Outcome.DRAW},
    }

    @property
    def moves(self) -> Tuple[str, ...]:
        return tuple(move.value for move in Move)

    def parse_move(self, token: str) -> Optional[Move]:
        try:
            return Move(token)
        except ValueError:
            return None

    def outcome_for(self, move: Move, opponent_move: Move) -> Outcome:
        return self.OUTCOMES[move][opponent_move]
