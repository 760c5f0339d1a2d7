import unittest

from sudoku_game import board
from tests.fixtures import PUZZLE, SOLUTION


class ConstraintCheckerTests(unittest.TestCase):
    def test_rejects_digit_already_in_row(self) -> None:
        # Row 0 of the puzzle already holds a 5
        self.assertFalse(board.is_valid_placement(PUZZLE, 0, 2, 5))

    def test_rejects_digit_already_in_column(self) -> None:
        # Column 2 holds an 8 at (2, 2)
        self.assertFalse(board.is_valid_placement(PUZZLE, 0, 2, 8))

    def test_rejects_digit_already_in_box(self) -> None:
        # 6 is not in row 0 or column 2 but sits in the top-left box at (1, 0)
        self.assertFalse(board.is_valid_placement(PUZZLE, 0, 2, 6))

    def test_accepts_the_solution_digit(self) -> None:
        self.assertTrue(board.is_valid_placement(PUZZLE, 0, 2, SOLUTION[0][2]))

    def test_filled_cell_never_conflicts_with_itself(self) -> None:
        grid = board.copy_board(SOLUTION)
        for i in range(9):
            for j in range(9):
                value = grid[i][j]
                grid[i][j] = 0
                self.assertTrue(board.is_valid_placement(grid, i, j, value), (i, j))
                grid[i][j] = value

    def test_does_not_modify_grid(self) -> None:
        before = board.copy_board(PUZZLE)
        board.is_valid_placement(PUZZLE, 0, 2, 1)
        self.assertEqual(PUZZLE, before)


class GridHelperTests(unittest.TestCase):
    def test_box_origin(self) -> None:
        self.assertEqual(board.box_origin(0, 0), (0, 0))
        self.assertEqual(board.box_origin(4, 7), (3, 6))
        self.assertEqual(board.box_origin(8, 2), (6, 0))

    def test_find_empty_is_row_major(self) -> None:
        self.assertEqual(board.find_empty(PUZZLE), (0, 2))
        self.assertIsNone(board.find_empty(SOLUTION))

    def test_complete_solution(self) -> None:
        self.assertTrue(board.is_complete_solution(SOLUTION))
        self.assertFalse(board.is_complete_solution(PUZZLE))

        swapped = board.copy_board(SOLUTION)
        swapped[0][0], swapped[0][1] = swapped[0][1], swapped[0][0]
        self.assertFalse(board.is_complete_solution(swapped))

    def test_has_conflicts(self) -> None:
        self.assertFalse(board.has_conflicts(SOLUTION))
        self.assertFalse(board.has_conflicts(PUZZLE))
        self.assertFalse(board.has_conflicts(board.make_empty_board()))

        row_clash = board.make_empty_board()
        row_clash[0][0] = row_clash[0][8] = 5
        self.assertTrue(board.has_conflicts(row_clash))

        column_clash = board.make_empty_board()
        column_clash[0][4] = column_clash[8][4] = 2
        self.assertTrue(board.has_conflicts(column_clash))

        box_clash = board.make_empty_board()
        box_clash[3][3] = box_clash[5][5] = 7
        self.assertTrue(board.has_conflicts(box_clash))

    def test_related_cells(self) -> None:
        related = board.related_cells(4, 4)
        self.assertEqual(len(related), 20)
        self.assertNotIn((4, 4), related)
        self.assertIn((4, 0), related)
        self.assertIn((0, 4), related)
        self.assertIn((3, 5), related)
        self.assertNotIn((0, 0), related)

    def test_get_conflicts(self) -> None:
        grid = board.copy_board(PUZZLE)
        grid[0][2] = 5
        self.assertEqual(board.get_conflicts(grid, 0, 2), {(0, 0)})
        self.assertEqual(board.get_conflicts(grid, 0, 3), set())

    def test_parse_accepts_dots_zeros_and_spaces(self) -> None:
        text = "\n".join(["0 0 0 0 0 0 0 0 0"] * 8 + ["12345678."])
        grid = board.parse_board(text)
        self.assertEqual(grid[8], [1, 2, 3, 4, 5, 6, 7, 8, 0])
        self.assertEqual(board.count_empty(grid), 73)

    def test_parse_rejects_bad_input(self) -> None:
        with self.assertRaises(ValueError):
            board.parse_board("123")
        with self.assertRaises(ValueError):
            board.parse_board("\n".join(["12345678x"] * 9))

    def test_format_then_parse(self) -> None:
        self.assertEqual(board.parse_board(
            board.format_board(PUZZLE).replace("|", "").replace("------+-------+------", "")), PUZZLE)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
