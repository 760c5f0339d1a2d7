import argparse
import logging
import random
import sys

from .board import count_empty, format_board, has_conflicts, parse_board
from .generator import DIFFICULTIES, PuzzleGenerator, count_solutions, solve
from .stats import DEFAULT_STATS_FILE

log = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

CMD_PLAY = "play"
CMD_GENERATE = "generate"
CMD_SOLVE = "solve"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="sudoku-game",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        description="Generate, play and solve 9x9 Sudoku puzzles.",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Be verbose")
    parser.add_argument(
        "--difficulty", choices=DIFFICULTIES, default="easy",
        help="Difficulty of generated puzzles")
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed, for reproducible puzzles")
    parser.add_argument(
        "--stats-file", default=DEFAULT_STATS_FILE,
        help="JSON file holding play statistics")

    subparsers = parser.add_subparsers(
        dest="command", help="Append --help for more help")
    subparsers.add_parser(CMD_PLAY, help="Open the game window (default)")
    subparsers.add_parser(CMD_GENERATE, help="Print a generated puzzle and its solution")
    parser_solve = subparsers.add_parser(CMD_SOLVE, help="Solve a puzzle from a file")
    parser_solve.add_argument(
        "filename", help="Nine lines of nine cells, '0' or '.' for blanks")
    return parser


def make_rng(seed):
    return random.Random(seed) if seed is not None else random.Random()


def cmd_generate(args, out):
    puzzle = PuzzleGenerator(args.difficulty, rng=make_rng(args.seed)).generate()
    print(format_board(puzzle.board), file=out)
    print(file=out)
    print(f"Removed {puzzle.removed} of {puzzle.target} cells ({puzzle.difficulty})", file=out)
    print(file=out)
    print(format_board(puzzle.solution), file=out)
    return EXIT_SUCCESS


def cmd_solve(args, out):
    log.info("Reading %s", args.filename)
    try:
        with open(args.filename, "rt") as f:
            board = parse_board(f.read())
    except (OSError, ValueError) as e:
        log.error("Cannot read puzzle: %s", e)
        return EXIT_FAILURE

    log.debug("Puzzle has %d blanks", count_empty(board))
    if has_conflicts(board):
        log.error("Puzzle givens repeat a digit in a row, column or box")
        print("No solution exists!", file=out)
        return EXIT_FAILURE

    count = count_solutions(board, 2)
    if count == 0:
        print("No solution exists!", file=out)
        return EXIT_FAILURE

    print("Unique solution:" if count == 1 else "Multiple solutions exist, showing one:", file=out)
    print(format_board(solve(board)), file=out)
    return EXIT_SUCCESS


def cmd_play(args):
    # Imported here so the headless commands never open a display
    from .game import SudokuGame

    SudokuGame(
        difficulty=args.difficulty,
        stats_file=args.stats_file,
        rng=make_rng(args.seed),
    ).run()
    return EXIT_SUCCESS


def main(argv=None, out=None):
    """
    Command-line entry point.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    out = out if out is not None else sys.stdout

    if args.command == CMD_GENERATE:
        return cmd_generate(args, out)
    if args.command == CMD_SOLVE:
        return cmd_solve(args, out)
    return cmd_play(args)
