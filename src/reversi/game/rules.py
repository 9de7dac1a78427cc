"""
Reversi rules: move legality, disc flipping, move enumeration and scoring.

All functions are pure; they read a Board and return new values. Move
generation works on the board's per-color bitboards; the position-level
functions below are thin wrappers over the mask-level ones.
"""
from typing import List, NamedTuple, Optional

from .board import (
    Board, Position, BLACK, WHITE, SIZE, FULL,
    opposite_color, check_position, check_color, iter_bits, bit_position, position_bit,
)

# Scan order for captures: NW, N, NE, W, E, SW, S, SE
DIRECTIONS = [(-1, -1), (-1, 0), (-1, 1),
              (0, -1),           (0, 1),
              (1, -1),  (1, 0),  (1, 1)]

_COL_FIRST = sum(1 << (row * SIZE) for row in range(SIZE))
_COL_LAST = _COL_FIRST << (SIZE - 1)


def _direction_shift(dr: int, dc: int):
    """Bit offset of one step in (dr, dc), and the mask dropping row wrap-around."""
    if dc == 1:
        mask = FULL ^ _COL_FIRST
    elif dc == -1:
        mask = FULL ^ _COL_LAST
    else:
        mask = FULL
    return dr * SIZE + dc, mask


_SHIFTS = [_direction_shift(dr, dc) for dr, dc in DIRECTIONS]


def _step(bits: int, offset: int, mask: int) -> int:
    if offset > 0:
        return (bits << offset) & mask
    return (bits >> -offset) & mask


class Score(NamedTuple):
    black: int
    white: int


def move_mask(own: int, opp: int) -> int:
    """Bitboard of the empty cells where `own` captures at least one `opp` disc."""
    empty = FULL ^ (own | opp)
    moves = 0
    for offset, mask in _SHIFTS:
        inner = mask & opp
        run = _step(own, offset, inner)
        # An opponent run is at most SIZE - 2 discs long
        for _ in range(SIZE - 3):
            run |= _step(run, offset, inner)
        moves |= _step(run, offset, mask) & empty
    return moves


def flip_mask(own: int, opp: int, move: int) -> int:
    """Bitboard of the `opp` discs captured by `own` placing at the single bit `move`."""
    flips = 0
    for offset, mask in _SHIFTS:
        run = 0
        cursor = _step(move, offset, mask)
        while cursor & opp:
            run |= cursor
            cursor = _step(cursor, offset, mask)
        if cursor & own:
            flips |= run
    return flips


def valid_move_mask(board: Board, color: int) -> int:
    return move_mask(board.bits(color), board.bits(opposite_color(color)))


def apply_move_bit(board: Board, move: int, color: int) -> Board:
    """Play the single-bit `move`, assumed legal, and return the new board."""
    own = board.bits(color)
    flips = flip_mask(own, board.bits(opposite_color(color)), move)
    return board.with_mask(color, flips | move)


def get_flippable_cells(board: Board, row: int, col: int, color: int) -> List[Position]:
    """
    Get the opponent discs captured by `color` playing at (row, col).

    Each direction is walked outward collecting opponent discs; the run is
    kept only if it is closed by a disc of `color`. The result is ordered by
    direction, then by distance from the placed disc, and never includes the
    placed cell itself. An occupied target captures nothing.

    Raises:
        OutOfBoardError: if (row, col) is off the board
        ValueError: if `color` is not BLACK or WHITE
    """
    check_position(row, col)
    check_color(color)

    own = board.bits(color)
    opp = board.bits(opposite_color(color))
    if (own | opp) & position_bit(row, col):
        return []

    flippable: List[Position] = []
    for dr, dc in DIRECTIONS:
        run = []
        r, c = row + dr, col + dc
        while 0 <= r < SIZE and 0 <= c < SIZE:
            bit = 1 << (r * SIZE + c)
            if opp & bit:
                run.append((r, c))
            elif own & bit:
                flippable.extend(run)
                break
            else:
                break
            r += dr
            c += dc

    return flippable


def is_valid_move(board: Board, row: int, col: int, color: int) -> bool:
    """A move is legal iff it captures at least one disc."""
    return len(get_flippable_cells(board, row, col, color)) > 0


def get_valid_moves(board: Board, color: int) -> List[Position]:
    """
    Get all legal moves for `color`.

    Returns:
        List of (row, col) tuples in row-major order
    """
    check_color(color)
    return [bit_position(index) for index in iter_bits(valid_move_mask(board, color))]


def has_valid_move(board: Board, color: int) -> bool:
    check_color(color)
    return valid_move_mask(board, color) != 0


def apply_move(board: Board, row: int, col: int, color: int) -> Optional[Board]:
    """
    Play `color` at (row, col).

    Returns:
        A new board with the disc placed and captures flipped, or None if the
        move is not legal. The input board is left untouched.
    """
    check_color(color)
    move = position_bit(row, col)
    own = board.bits(color)
    opp = board.bits(opposite_color(color))
    if (own | opp) & move:
        return None
    flips = flip_mask(own, opp, move)
    if not flips:
        return None
    return board.with_mask(color, flips | move)


def calculate_score(board: Board) -> Score:
    """Count the discs of each color."""
    return Score(black=board.count(BLACK), white=board.count(WHITE))


def next_to_move(board: Board, last_color: int) -> Optional[int]:
    """
    Decide who acts after `last_color` has moved.

    The opponent moves if it can; otherwise `last_color` moves again (the
    opponent passes). Returns None when neither side can move.
    """
    opponent = opposite_color(last_color)
    if has_valid_move(board, opponent):
        return opponent
    if has_valid_move(board, last_color):
        return last_color
    return None


def is_game_over(board: Board) -> bool:
    """The game ends when neither color has a legal move."""
    return not has_valid_move(board, BLACK) and not has_valid_move(board, WHITE)


def get_winner(board: Board) -> int:
    """
    Determine the winner by disc count.

    Returns:
        BLACK, WHITE, or 0 for a draw
    """
    score = calculate_score(board)
    if score.black > score.white:
        return BLACK
    if score.white > score.black:
        return WHITE
    return 0
