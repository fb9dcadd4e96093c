"""
Connection Registry Unit Tests
"""

import threading

from rps_arena.services.connection_registry import ConnectionRegistry


class TestConnectionRegistry:
    """Test tracking of connected players"""

    def setup_method(self):
        self.registry = ConnectionRegistry()

    def test_add_and_lookup(self):
        self.registry.add_connection('p1')

        assert self.registry.has_connection('p1')
        assert self.registry.get_connection('p1')['player_id'] == 'p1'
        assert 'connected_at' in self.registry.get_connection('p1')
        assert self.registry.get_connection_count() == 1

    def test_remove(self):
        self.registry.add_connection('p1')

        removed = self.registry.remove_connection('p1')

        assert removed['player_id'] == 'p1'
        assert not self.registry.has_connection('p1')
        assert self.registry.remove_connection('p1') is None

    def test_player_ids_in_connection_order(self):
        for player_id in ('c', 'a', 'b'):
            self.registry.add_connection(player_id)

        assert self.registry.get_player_ids() == ['c', 'a', 'b']

    def test_clear(self):
        self.registry.add_connection('p1')
        self.registry.clear()
        assert self.registry.get_connection_count() == 0

    def test_concurrent_adds(self):
        threads = [
            threading.Thread(target=self.registry.add_connection, args=(f'p{index}',))
            for index in range(50)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert self.registry.get_connection_count() == 50
