"""
Bot Directory Unit Tests
"""

from rps_arena.services.bot_directory import BotDirectory
from tests.helpers.notifier_mocks import make_game_settings


class TestBotDirectory:
    """Test bot registration and the recent bots list"""

    def setup_method(self):
        self.bots = BotDirectory(make_game_settings(recent_bots_limit=3))

    def test_empty_directory(self):
        assert self.bots.list_recent_bots() == []
        assert self.bots.describe_recent_bots() == "Recent Connected bots: none"

    def test_register_bot(self):
        self.bots.register_bot('p1', 'RoboRock')

        assert self.bots.list_recent_bots() == [{'player_id': 'p1', 'name': 'RoboRock'}]
        assert self.bots.describe_recent_bots() == "Recent Connected bots: RoboRock (p1)"

    def test_recent_list_is_limited_to_newest(self):
        for index in range(5):
            self.bots.register_bot(f'p{index}', f'bot{index}')

        assert [bot['player_id'] for bot in self.bots.list_recent_bots()] == ['p2', 'p3', 'p4']
        assert self.bots.get_bot_count() == 5

    def test_reregistering_moves_bot_to_newest(self):
        self.bots.register_bot('p1', 'one')
        self.bots.register_bot('p2', 'two')
        self.bots.register_bot('p1', 'uno')

        assert self.bots.describe_recent_bots() == "Recent Connected bots: two (p2), uno (p1)"

    def test_unregister_bot(self):
        self.bots.register_bot('p1', 'one')

        assert self.bots.unregister_bot('p1') == 'one'
        assert self.bots.list_recent_bots() == []
        assert self.bots.unregister_bot('p1') is None
