"""
Static evaluation of Reversi positions.
"""
from typing import List, Tuple
import numpy as np

from ..game.board import Board, opposite_color, popcount
from ..game.rules import move_mask

# Classic Othello square weights: corners are prized, the squares that
# hand the opponent a corner (C- and X-squares) are penalised.
POSITION_WEIGHTS = np.array([
    [120, -20,  20,   5,   5,  20, -20, 120],
    [-20, -40,  -5,  -5,  -5,  -5, -40, -20],
    [ 20,  -5,  15,   3,   3,  15,  -5,  20],
    [  5,  -5,   3,   3,   3,   3,  -5,   5],
    [  5,  -5,   3,   3,   3,   3,  -5,   5],
    [ 20,  -5,  15,   3,   3,  15,  -5,  20],
    [-20, -40,  -5,  -5,  -5,  -5, -40, -20],
    [120, -20,  20,   5,   5,  20, -20, 120],
], dtype=np.int32)
POSITION_WEIGHTS.flags.writeable = False

ENDGAME_EMPTY_THRESHOLD = 10
ENDGAME_DISC_WEIGHT = 100
MOBILITY_WEIGHT = 10


def weight_masks(weights: np.ndarray) -> List[Tuple[int, int]]:
    """Group the squares of a weight table into (weight, bitboard) pairs, heaviest first."""
    masks = {}
    for index, weight in enumerate(weights.ravel().tolist()):
        masks[weight] = masks.get(weight, 0) | (1 << index)
    return sorted(masks.items(), reverse=True)


WEIGHT_MASKS = weight_masks(POSITION_WEIGHTS)


def is_endgame(board: Board) -> bool:
    return board.empty_count() <= ENDGAME_EMPTY_THRESHOLD


def evaluate_board(board: Board, color: int) -> int:
    """
    Score `board` from the point of view of `color`; higher is better.

    With ten or fewer empty cells only material counts (100 per disc of
    difference). Before that the score is the positional weight of own
    discs minus the opponent's, plus 10 per move of mobility advantage.
    """
    own = board.bits(color)
    theirs = board.bits(opposite_color(color))

    if is_endgame(board):
        return ENDGAME_DISC_WEIGHT * (popcount(own) - popcount(theirs))

    positional = 0
    for weight, mask in WEIGHT_MASKS:
        positional += weight * (popcount(own & mask) - popcount(theirs & mask))
    mobility = popcount(move_mask(own, theirs)) - popcount(move_mask(theirs, own))
    return positional + MOBILITY_WEIGHT * mobility
