from sudoku_game.board import copy_board, count_empty, parse_board
from sudoku_game.generator import Puzzle

PUZZLE = parse_board("""
53..7....
6..195...
.98....6.
8...6...3
4..8.3..1
7...2...6
.6....28.
...419..5
....8..79
""")

SOLUTION = parse_board("""
534678912
672195348
198342567
859761423
426853791
713924856
961537284
287419635
345286179
""")

# (0, 0) holds a given 5, (0, 2) is blank with solution digit 4
GIVEN = (0, 0)
BLANK = (0, 2)


def known_puzzle():
    return Puzzle(copy_board(PUZZLE), copy_board(PUZZLE), copy_board(SOLUTION),
                  count_empty(PUZZLE), 50, 'medium')
