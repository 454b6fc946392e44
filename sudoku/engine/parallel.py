"""Race parallel Ray workers to complete a large board."""
import random
from typing import Optional

import ray
from ray.exceptions import RayError

from sudoku.common.config import GeneratorConfig
from sudoku.engine.checker import Grid
from sudoku.engine.generator import BoardGenerator, GenerationError, fill_diagonals
from sudoku.utils.log import get_logger

logger = get_logger(__name__)


@ray.remote
def complete_board(board: Grid, seed: int, max_search_steps: Optional[int] = None):
    """Complete a seeded board in a worker. Returns None when the step budget runs out."""
    worker_logger = get_logger(__name__, in_ray_actor=True)
    size = len(board)
    generator = BoardGenerator(
        size,
        config=GeneratorConfig(size=size, num_workers=1, max_search_steps=max_search_steps or 0),
        seed=seed,
    )
    if generator.solve(board, max_steps=max_search_steps):
        return board
    worker_logger.debug(f"Worker with seed {seed} gave up after {max_search_steps} steps")
    return None


def race_complete_board(
    size: int,
    num_workers: int = 0,
    max_search_steps: Optional[int] = None,
    seed: Optional[int] = None,
) -> Grid:
    """
    Complete a diagonal-seeded board with several workers and keep the first result.

    Every worker receives its own copy of the same seeded board and a distinct
    random seed. Once one returns a board the others are cancelled. If every
    worker exhausts its step budget a new round starts from a fresh seed.

    Args:
        size (`int`): Board size.
        num_workers (`int`): Number of racing workers, 0 means one per available CPU.
        max_search_steps (`int`): Step budget per worker, None means unlimited.
        seed (`int`): Seed for the diagonal boxes and the worker seeds.

    Returns:
        `list[list[int]]`: The completed board.

    Raises:
        `GenerationError`: if a worker fails.
    """
    if not ray.is_initialized():
        ray.init(ignore_reinit_error=True, log_to_driver=False)
    if num_workers <= 0:
        num_workers = max(1, int(ray.available_resources().get("CPU", 1)))

    rng = random.Random(seed)
    round_id = 0
    while True:
        round_id += 1
        board = [[0] * size for _ in range(size)]
        fill_diagonals(board, rng)
        board_ref = ray.put(board)
        pending = [
            complete_board.remote(board_ref, rng.getrandbits(32), max_search_steps)
            for _ in range(num_workers)
        ]
        logger.info(f"Round {round_id}: racing {num_workers} workers on a {size}x{size} board")
        try:
            while pending:
                done, pending = ray.wait(pending, num_returns=1)
                result = ray.get(done[0])
                if result is not None:
                    return result
        except RayError as e:
            logger.error(f"Parallel generation failed: {e}")
            raise GenerationError(f"Parallel generation failed: {e}") from e
        finally:
            for ref in pending:
                ray.cancel(ref, force=True)
        logger.warning(f"Round {round_id}: every worker exhausted its search budget, reseeding")
