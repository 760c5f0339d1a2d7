import json
import os
import tempfile
import unittest

from sudoku_game.stats import StatisticsStore


class StatisticsStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.filename = os.path.join(self.tmpdir.name, "stats.json")

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def test_defaults_without_file(self) -> None:
        store = StatisticsStore(self.filename)
        self.assertEqual(store.as_dict(), {
            'games_played': 0, 'games_won': 0, 'hints_used': 0, 'best_time': None})
        self.assertFalse(os.path.exists(self.filename))

    def test_every_change_is_written(self) -> None:
        store = StatisticsStore(self.filename)
        store.record_game_started()
        store.record_hint()
        store.record_win(95)

        with open(self.filename) as f:
            data = json.load(f)
        self.assertEqual(data, {
            'games_played': 1, 'games_won': 1, 'hints_used': 1, 'best_time': 95})

        reloaded = StatisticsStore(self.filename)
        self.assertEqual(reloaded.as_dict(), store.as_dict())

    def test_best_time_keeps_fastest(self) -> None:
        store = StatisticsStore(self.filename)
        store.record_win(120)
        store.record_win(200)
        self.assertEqual(store.best_time, 120)
        store.record_win(0)
        self.assertEqual(store.best_time, 0)
        self.assertEqual(store.games_won, 3)

    def test_corrupt_file_falls_back_to_defaults(self) -> None:
        with open(self.filename, 'w') as f:
            f.write("{not json")
        with self.assertLogs('sudoku_game.stats', level='WARNING'):
            store = StatisticsStore(self.filename)
        self.assertEqual(store.games_played, 0)

    def test_wrong_shape_is_ignored(self) -> None:
        with open(self.filename, 'w') as f:
            json.dump([1, 2, 3], f)
        with self.assertLogs('sudoku_game.stats', level='WARNING'):
            store = StatisticsStore(self.filename)
        self.assertIsNone(store.best_time)

    def test_bad_values_are_skipped(self) -> None:
        with open(self.filename, 'w') as f:
            json.dump({'games_played': "many", 'games_won': 2, 'best_time': -5}, f)
        store = StatisticsStore(self.filename)
        self.assertEqual(store.games_played, 0)
        self.assertEqual(store.games_won, 2)
        self.assertIsNone(store.best_time)

    def test_booleans_are_not_counts(self) -> None:
        with open(self.filename, 'w') as f:
            json.dump({'games_played': True, 'hints_used': False, 'games_won': 4, 'best_time': True}, f)
        store = StatisticsStore(self.filename)
        self.assertEqual(store.games_played, 0)
        self.assertIs(type(store.games_played), int)
        self.assertEqual(store.hints_used, 0)
        self.assertEqual(store.games_won, 4)
        self.assertIsNone(store.best_time)

    def test_unwritable_file_only_warns(self) -> None:
        store = StatisticsStore(os.path.join(self.tmpdir.name, "missing", "stats.json"))
        with self.assertLogs('sudoku_game.stats', level='WARNING'):
            store.record_game_started()
        self.assertEqual(store.games_played, 1)

    def test_in_memory_store(self) -> None:
        store = StatisticsStore(filename=None)
        store.record_hint()
        self.assertEqual(store.hints_used, 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
