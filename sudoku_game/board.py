# =========================================================================
# GRID MODEL & CONSTRAINT CHECKER
# A grid is a 9x9 list of lists holding digits 0-9 (0 = empty cell).
# =========================================================================

SIZE = 9
BOX = 3
DIGITS = tuple(range(1, SIZE + 1))


def make_empty_board():
    return [[0] * SIZE for _ in range(SIZE)]


def copy_board(board):
    return [row[:] for row in board]


def box_origin(row, col):
    """Top-left coordinate of the 3x3 box containing (row, col)."""
    return BOX * (row // BOX), BOX * (col // BOX)


def is_valid_placement(board, row, col, num):
    """Checks if 'num' can go at (row, col) without repeating in its row, column or box."""
    # Check row and column
    for i in range(SIZE):
        if board[row][i] == num or board[i][col] == num:
            return False

    # Check subgrid
    box_row, box_col = box_origin(row, col)
    for i in range(box_row, box_row + BOX):
        for j in range(box_col, box_col + BOX):
            if board[i][j] == num:
                return False

    return True


def find_empty(board):
    """Returns the first empty cell in row-major order, or None if the grid is full."""
    for i in range(SIZE):
        for j in range(SIZE):
            if board[i][j] == 0:
                return i, j
    return None


def count_empty(board):
    return sum(1 for row in board for value in row if value == 0)


def units():
    """Yields the 27 rows, columns and boxes as lists of coordinates."""
    for i in range(SIZE):
        yield [(i, j) for j in range(SIZE)]
    for j in range(SIZE):
        yield [(i, j) for i in range(SIZE)]
    for box_row in range(0, SIZE, BOX):
        for box_col in range(0, SIZE, BOX):
            yield [(box_row + i, box_col + j) for i in range(BOX) for j in range(BOX)]


def is_complete_solution(board):
    """True when every row, column and box holds exactly the digits 1-9."""
    expected = set(DIGITS)
    for unit in units():
        values = [board[i][j] for i, j in unit]
        if len(values) != SIZE or set(values) != expected:
            return False
    return True


def has_conflicts(board):
    """True when some digit already repeats within a row, column or box."""
    for unit in units():
        values = [board[i][j] for i, j in unit if board[i][j] != 0]
        if len(values) != len(set(values)):
            return True
    return False


def boards_equal(a, b):
    return all(a[i][j] == b[i][j] for i in range(SIZE) for j in range(SIZE))


def is_related(row, col, other_row, other_col):
    """Same row, same column or same box (a cell is not related to itself)."""
    if (row, col) == (other_row, other_col):
        return False
    return (row == other_row or col == other_col or
            box_origin(row, col) == box_origin(other_row, other_col))


def related_cells(row, col):
    return {(i, j) for i in range(SIZE) for j in range(SIZE) if is_related(row, col, i, j)}


def get_conflicts(board, row, col):
    """Identifies the cells that repeat the digit held at (row, col)."""
    num = board[row][col]
    if num == 0:
        return set()
    return {(i, j) for i, j in related_cells(row, col) if board[i][j] == num}


def parse_board(text):
    """
    Reads a grid from text: nine lines of nine characters, digits with
    '0' or '.' for blanks. Whitespace inside a line is ignored.
    """
    rows = []
    for line in text.splitlines():
        line = "".join(line.split())
        if not line:
            continue
        if len(line) != SIZE:
            raise ValueError(f"Expected {SIZE} cells per line, got {len(line)}: {line!r}")
        row = []
        for ch in line:
            if ch == ".":
                row.append(0)
            elif ch.isdigit():
                row.append(int(ch))
            else:
                raise ValueError(f"Invalid cell character {ch!r}")
        rows.append(row)
    if len(rows) != SIZE:
        raise ValueError(f"Expected {SIZE} rows, got {len(rows)}")
    return rows


def format_board(board):
    """Renders a grid as text with box separators, blanks shown as '.'."""
    lines = []
    for i, row in enumerate(board):
        if i and i % BOX == 0:
            lines.append("------+-------+------")
        cells = [str(v) if v else "." for v in row]
        lines.append(" | ".join(" ".join(cells[k:k + BOX]) for k in range(0, SIZE, BOX)))
    return "\n".join(lines)
