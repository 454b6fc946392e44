"""Command line entry point."""
import argparse
import os
import sys
from typing import List, Optional

from sudoku.cli.game import Game, choose, new_board, new_board_interactive
from sudoku.cli.table import Colors, horizontal_divider, paint, render_grid
from sudoku.common.config import Config, load_config
from sudoku.common.constants import SUPPORTED_SIZES, Difficulty
from sudoku.engine.generator import BoardGenerator, GenerationError
from sudoku.engine.removal import REMOVAL_POLICIES
from sudoku.storage.game_store import GameStore
from sudoku.utils.log import get_logger


def build_config(args: argparse.Namespace) -> Config:
    """Load the YAML config if given, apply command line overrides and validate."""
    config = load_config(args.config) if args.config else Config()
    if getattr(args, "size", None) is not None:
        config.generator.size = args.size
    if getattr(args, "difficulty", None) is not None:
        config.generator.difficulty = args.difficulty
    if getattr(args, "seed", None) is not None:
        config.generator.seed = args.seed
    if getattr(args, "policy", None) is not None:
        config.generator.removal_policy = args.policy
    if getattr(args, "workers", None) is not None:
        config.generator.num_workers = args.workers
    if args.save_dir is not None:
        config.storage.save_dir = args.save_dir
    if args.no_color:
        config.display.color = False
    if args.log_level is not None:
        config.log.level = args.log_level
    config.check_and_update()
    for key, value in config.get_envs().items():
        if value:
            os.environ[key] = value
    # refresh the package logger level from the environment
    get_logger()
    return config


def play(args: argparse.Namespace) -> int:
    config = build_config(args)
    store = GameStore(config.storage.save_dir)
    try:
        if args.size is None and args.difficulty is None and args.blanks is None:
            board = new_board_interactive(config)
            if board is None:
                return 1
        else:
            if args.blanks is not None:
                total = config.generator.size**2
                if not 1 <= args.blanks <= total:
                    print(f"--blanks must be between 1 and {total}", file=sys.stderr)
                    return 2
            print(f"Generating {config.generator.size}x{config.generator.size} board...")
            board = new_board(config, blanks=args.blanks)
    except GenerationError as e:
        print(paint(f"Board generation failed: {e}", Colors.RED, config.display.color))
        return 1
    game = Game(board, store=store, color=config.display.color, autosave=config.storage.autosave)
    game.run()
    return 0


def resume(args: argparse.Namespace) -> int:
    config = build_config(args)
    store = GameStore(config.storage.save_dir)
    game_id = args.game_id
    if game_id is None:
        games = [game for game in store.list_games() if not game.solved]
        if not games:
            print("No unfinished games to resume.")
            return 1
        options = [
            f"{game.id[:8]}  {game.size}x{game.size} {game.difficulty:<10} "
            f"started {game.created_at:%Y-%m-%d %H:%M}"
            for game in games
        ]
        game_id = games[choose("Choose a game to resume:", options)].id
    else:
        matches = [game.id for game in store.list_games() if game.id.startswith(game_id)]
        if len(matches) != 1:
            print(f"No unique saved game matches `{game_id}`.", file=sys.stderr)
            return 1
        game_id = matches[0]

    board = store.load(game_id)
    Game(board, store=store, color=config.display.color, autosave=config.storage.autosave).run()
    return 0


def list_games(args: argparse.Namespace) -> int:
    config = build_config(args)
    games = GameStore(config.storage.save_dir).list_games()
    if not games:
        print("No saved games.")
        return 0
    for game in games:
        status = (
            paint(f"solved {game.solved_at:%Y-%m-%d %H:%M}", Colors.GREEN, config.display.color)
            if game.solved
            else paint("in progress", Colors.YELLOW, config.display.color)
        )
        print(
            f"{game.id}  {game.size:>2}x{game.size:<2} {game.difficulty:<10} "
            f"{game.created_at:%Y-%m-%d %H:%M}  {status}"
        )
    return 0


def generate(args: argparse.Namespace) -> int:
    config = build_config(args)
    generator = BoardGenerator(config.generator.size, config=config.generator)
    try:
        if args.blanks is not None:
            puzzle = generator.generate_custom_puzzle(args.blanks)
        else:
            puzzle = generator.generate_puzzle(Difficulty(config.generator.difficulty))
    except (GenerationError, ValueError) as e:
        print(f"Board generation failed: {e}", file=sys.stderr)
        return 1
    print(render_grid(puzzle, color=config.display.color))
    if args.solution:
        print(horizontal_divider(config.generator.size))
        print(render_grid(generator.solution, color=config.display.color))
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML config file.")
    parser.add_argument("--save-dir", type=str, default=None, help="Directory of saved games.")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors.")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level.",
    )


def _add_generation_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--size", type=int, choices=SUPPORTED_SIZES, default=None)
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--difficulty",
        type=str,
        default=None,
        help=f"One of {', '.join(level.value for level in Difficulty)}.",
    )
    group.add_argument("--blanks", type=int, default=None, help="Exact number of empty cells.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument(
        "--policy",
        type=str,
        default=None,
        choices=REMOVAL_POLICIES.keys(),
        help="How cell removals are verified.",
    )
    parser.add_argument(
        "--workers", type=int, default=None, help="Parallel workers for large boards."
    )


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sudoku", description="Play Sudoku in the terminal.")
    subparsers = parser.add_subparsers(dest="command")

    play_parser = subparsers.add_parser("play", help="Start a new game.")
    _add_common_arguments(play_parser)
    _add_generation_arguments(play_parser)
    play_parser.set_defaults(func=play)

    resume_parser = subparsers.add_parser("resume", help="Continue a saved game.")
    _add_common_arguments(resume_parser)
    resume_parser.add_argument("game_id", nargs="?", default=None, help="Game id or prefix.")
    resume_parser.set_defaults(func=resume)

    list_parser = subparsers.add_parser("list", help="List saved games.")
    _add_common_arguments(list_parser)
    list_parser.set_defaults(func=list_games)

    generate_parser = subparsers.add_parser("generate", help="Print a puzzle and exit.")
    _add_common_arguments(generate_parser)
    _add_generation_arguments(generate_parser)
    generate_parser.add_argument(
        "--solution", action="store_true", help="Also print the solution."
    )
    generate_parser.set_defaults(func=generate)
    return parser


_COMMANDS = ("play", "resume", "list", "generate")


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    # bare options such as `sudoku --size 9` belong to `play`
    if not argv or argv[0] not in _COMMANDS + ("-h", "--help"):
        argv = ["play"] + argv
    args = get_parser().parse_args(argv)
    try:
        return args.func(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
