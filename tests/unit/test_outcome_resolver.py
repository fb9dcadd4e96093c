"""
Outcome Resolver Unit Tests

Tests for the rock/paper/scissors outcome table and round resolution.
"""

import pytest

from rps_arena.core.outcome_resolver import Move, Outcome, RockPaperScissorsResolver, RoundResult


class TestRockPaperScissorsResolver:
    """Test move parsing and outcome lookup"""

    def setup_method(self):
        self.resolver = RockPaperScissorsResolver()

    def test_moves(self):
        assert self.resolver.moves == ('rock', 'paper', 'scissors')

    def test_describe_moves(self):
        assert self.resolver.describe_moves() == "'rock', 'paper', or 'scissors'"

    @pytest.mark.parametrize("token,expected", [
        ('rock', Move.ROCK),
        ('paper', Move.PAPER),
        ('scissors', Move.SCISSORS),
        ('lizard', None),
        ('Rock', None),
        ('', None),
    ])
    def test_parse_move(self, token, expected):
        assert self.resolver.parse_move(token) == expected

    @pytest.mark.parametrize("move,opponent_move,expected", [
        (Move.ROCK, Move.SCISSORS, Outcome.WIN),
        (Move.SCISSORS, Move.PAPER, Outcome.WIN),
        (Move.PAPER, Move.ROCK, Outcome.WIN),
        (Move.SCISSORS, Move.ROCK, Outcome.LOSE),
        (Move.PAPER, Move.SCISSORS, Outcome.LOSE),
        (Move.ROCK, Move.PAPER, Outcome.LOSE),
        (Move.ROCK, Move.ROCK, Outcome.DRAW),
        (Move.PAPER, Move.PAPER, Outcome.DRAW),
        (Move.SCISSORS, Move.SCISSORS, Outcome.DRAW),
    ])
    def test_outcome_for(self, move, opponent_move, expected):
        assert self.resolver.outcome_for(move, opponent_move) == expected

    def test_outcomes_are_complementary(self):
        opposite = {Outcome.WIN: Outcome.LOSE, Outcome.LOSE: Outcome.WIN, Outcome.DRAW: Outcome.DRAW}
        for move in Move:
            for opponent_move in Move:
                assert self.resolver.outcome_for(opponent_move, move) == opposite[
                    self.resolver.outcome_for(move, opponent_move)
                ]


class TestRoundResolution:
    """Test resolving a full round"""

    def setup_method(self):
        self.resolver = RockPaperScissorsResolver()

    def test_resolve_win_and_loss(self):
        results = self.resolver.resolve('s1', {'p1': Move.ROCK, 'p2': Move.SCISSORS})

        assert results['p1'] == RoundResult('p1', Outcome.WIN, Move.SCISSORS, 's1')
        assert results['p2'] == RoundResult('p2', Outcome.LOSE, Move.ROCK, 's1')

    def test_resolve_draw(self):
        results = self.resolver.resolve('s1', {'p1': Move.PAPER, 'p2': Move.PAPER})

        assert results['p1'].outcome == Outcome.DRAW
        assert results['p2'].outcome == Outcome.DRAW

    @pytest.mark.parametrize("moves", [
        {},
        {'p1': Move.ROCK},
        {'p1': Move.ROCK, 'p2': Move.PAPER, 'p3': Move.SCISSORS},
    ])
    def test_resolve_requires_two_moves(self, moves):
        with pytest.raises(ValueError):
            self.resolver.resolve('s1', moves)

    def test_round_result_to_dict(self):
        result = RoundResult('p1', Outcome.LOSE, Move.PAPER, 's1')
        assert result.to_dict() == {
            'player_id': 'p1',
            'outcome': 'lose',
            'opponent_move': 'paper',
            'session_id': 's1',
        }
