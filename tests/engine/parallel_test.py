import unittest
from unittest import mock

import ray

from sudoku.common.config import GeneratorConfig
from sudoku.engine.checker import is_solved
from sudoku.engine.generator import BoardGenerator, GenerationError
from sudoku.engine.parallel import race_complete_board


@ray.remote
def crashing_worker(board, seed, max_search_steps=None):
    raise RuntimeError("worker crashed")


class TestParallelGeneration(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        ray.init(ignore_reinit_error=True, num_cpus=2, log_to_driver=False)

    @classmethod
    def tearDownClass(cls):
        try:
            ray.shutdown()
        except Exception:
            pass

    def test_race_completes_board(self):
        board = race_complete_board(9, num_workers=2, seed=3)
        self.assertTrue(is_solved(board))

    def test_race_uses_available_cpus(self):
        board = race_complete_board(4, num_workers=0, seed=5)
        self.assertTrue(is_solved(board))

    def test_generator_races_above_threshold(self):
        config = GeneratorConfig(size=16, num_workers=2, parallel_threshold=9)
        generator = BoardGenerator(16, config=config, seed=11)
        with mock.patch(
            "sudoku.engine.parallel.race_complete_board", wraps=race_complete_board
        ) as race:
            board = generator.generate()
        race.assert_called_once()
        self.assertEqual(race.call_args.kwargs["num_workers"], 2)
        self.assertTrue(is_solved(board))
        self.assertEqual(generator.solution, board)

    def test_single_worker_stays_sequential(self):
        config = GeneratorConfig(size=16, num_workers=1, parallel_threshold=9)
        generator = BoardGenerator(16, config=config, seed=11)
        with mock.patch("sudoku.engine.parallel.race_complete_board") as race:
            board = generator.generate()
        race.assert_not_called()
        self.assertTrue(is_solved(board))

    def test_worker_failure_becomes_generation_error(self):
        with mock.patch("sudoku.engine.parallel.complete_board", crashing_worker):
            with self.assertRaises(GenerationError):
                race_complete_board(9, num_workers=2, seed=1)
