"""
Tests for move legality, flipping, enumeration and scoring.
"""
import numpy as np
import pytest

from reversi.game.board import Board, OutOfBoardError, EMPTY, BLACK, WHITE, SIZE, opposite_color
from reversi.game.rules import (
    is_valid_move, get_flippable_cells, get_valid_moves, has_valid_move, apply_move,
    calculate_score, next_to_move, is_game_over, get_winner,
)


def random_boards(seed: int, count: int):
    """Positions reached by random play, so every board is a legal one."""
    rng = np.random.default_rng(seed)
    boards = []
    board, color = Board.initial(), BLACK
    while len(boards) < count:
        moves = get_valid_moves(board, color)
        if not moves:
            color = opposite_color(color)
            if not get_valid_moves(board, color):
                board, color = Board.initial(), BLACK
            continue
        row, col = moves[int(rng.integers(len(moves)))]
        board = apply_move(board, row, col, color)
        color = opposite_color(color)
        boards.append(board)
    return boards


# Black to play at (3, 3) captures north, east (two discs) and south-east;
# the southern run is open-ended and is not captured.
MULTI_CAPTURE = Board.from_string("""
    . . . . . . . .
    . . . B . . . .
    . . . W . . . .
    . . . . W W B .
    . . . W W . . .
    . . . . . B . .
    . . . . . . . .
    . . . . . . . .
""")


def test_valid_moves():
    """Test valid move generation in the initial position."""
    board = Board.initial()
    expected_moves = [(2, 3), (3, 2), (4, 5), (5, 4)]
    assert get_valid_moves(board, BLACK) == expected_moves, \
        f"Expected valid moves {expected_moves}, got {get_valid_moves(board, BLACK)}"
    assert get_valid_moves(board, WHITE) == [(2, 4), (3, 5), (4, 2), (5, 3)]


def test_make_move():
    """Test making a move and capturing a disc."""
    board = Board.initial()
    assert get_flippable_cells(board, 2, 3, BLACK) == [(3, 3)]

    after = apply_move(board, 2, 3, BLACK)
    assert after is not None, "Should be a valid move"
    assert after[2, 3] == BLACK, "Move should place black piece"
    assert after[3, 3] == BLACK, "Should capture white piece"
    assert calculate_score(after) == (4, 1)
    assert calculate_score(board) == (2, 2), "Original board must be unchanged"


def test_flippable_cells_order():
    """Captures are listed by direction, then by distance."""
    flips = get_flippable_cells(MULTI_CAPTURE, 3, 3, BLACK)
    assert flips == [(2, 3), (3, 4), (3, 5), (4, 4)]

    after = apply_move(MULTI_CAPTURE, 3, 3, BLACK)
    assert after[4, 3] == WHITE, "Open-ended run must not flip"
    assert calculate_score(after) == (8, 1)


def test_occupied_and_non_capturing_moves():
    board = Board.initial()
    assert not is_valid_move(board, 3, 3, BLACK), "Occupied cell"
    assert get_flippable_cells(board, 3, 4, WHITE) == []
    assert not is_valid_move(board, 0, 0, BLACK), "No capture"
    assert apply_move(board, 0, 0, BLACK) is None


def test_out_of_range_and_bad_color():
    board = Board.initial()
    with pytest.raises(OutOfBoardError):
        is_valid_move(board, -1, 0, BLACK)
    with pytest.raises(OutOfBoardError):
        get_flippable_cells(board, 0, 8, WHITE)
    with pytest.raises(ValueError):
        is_valid_move(board, 2, 3, EMPTY)
    with pytest.raises(ValueError):
        get_valid_moves(board, 7)


def test_valid_moves_match_is_valid_move():
    """Enumeration is exactly the legal cells, row-major, no duplicates."""
    for board in random_boards(seed=1, count=30):
        for color in (BLACK, WHITE):
            moves = get_valid_moves(board, color)
            expected = [(r, c) for r in range(SIZE) for c in range(SIZE)
                        if is_valid_move(board, r, c, color)]
            assert moves == expected
            assert len(set(moves)) == len(moves)
            assert moves == sorted(moves)
            assert has_valid_move(board, color) == bool(moves)


def test_legal_iff_captures():
    for board in random_boards(seed=2, count=20):
        for row in range(SIZE):
            for col in range(SIZE):
                flips = get_flippable_cells(board, row, col, WHITE)
                assert is_valid_move(board, row, col, WHITE) == bool(flips)


def test_apply_move_changes_only_placed_and_captured():
    for board in random_boards(seed=3, count=20):
        for color in (BLACK, WHITE):
            for row, col in get_valid_moves(board, color):
                flips = get_flippable_cells(board, row, col, color)
                after = apply_move(board, row, col, color)

                before_total = board.count(BLACK) + board.count(WHITE)
                after_total = after.count(BLACK) + after.count(WHITE)
                assert after_total == before_total + 1
                assert after.count(color) == board.count(color) + 1 + len(flips)

                changed = {tuple(p) for p in np.argwhere(board.cells != after.cells)}
                assert changed == {(row, col)} | set(flips)
                assert all(after[p] == color for p in flips)


def test_no_captures_across_board_edges():
    """A run reaching the side of the board does not continue on the next row."""
    board = Board.from_string("""
        . . . . . . B W
        . . . . . . . .
        W B . . . . . .
        . . . . . . B .
        . . . . . . . W
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
    """)
    assert get_valid_moves(board, BLACK) == []
    assert not has_valid_move(board, BLACK)
    assert apply_move(board, 1, 0, BLACK) is None
    assert apply_move(board, 1, 7, BLACK) is None
    assert apply_move(board, 6, 0, BLACK) is None


def test_next_to_move_and_game_over():
    board = Board.initial()
    assert next_to_move(board, BLACK) == WHITE
    assert not is_game_over(board)

    # White's only disc sits behind an unbroken black row: white cannot move
    one_sided = Board.from_string("""
        . W B B B B B B
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
        . . . . W B . .
        . . . . . . . .
        . . . . . . . .
        . . . . . . . .
    """)
    after = apply_move(one_sided, 4, 3, BLACK)
    assert get_valid_moves(after, WHITE) == []
    assert next_to_move(after, BLACK) == BLACK, "White passes, black moves again"

    final = apply_move(after, 0, 0, BLACK)
    assert next_to_move(final, BLACK) is None
    assert is_game_over(final)
    assert get_winner(final) == BLACK


def test_get_winner_draw():
    board = Board.from_string("\n".join(["BBBBWWWW"] * 8))
    assert calculate_score(board) == (32, 32)
    assert is_game_over(board)
    assert get_winner(board) == 0


if __name__ == "__main__":
    print("Running rules tests...\n")

    test_valid_moves()
    test_make_move()
    test_flippable_cells_order()
    test_occupied_and_non_capturing_moves()
    test_out_of_range_and_bad_color()
    test_valid_moves_match_is_valid_move()
    test_legal_iff_captures()
    test_apply_move_changes_only_placed_and_captured()
    test_no_captures_across_board_edges()
    test_next_to_move_and_game_over()
    test_get_winner_draw()

    print("\nAll tests passed successfully!")
