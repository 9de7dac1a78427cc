"""
Minimax game-tree search with alpha-beta pruning.
"""
import logging
import math
from dataclasses import dataclass
from typing import Iterator, Optional

from ..game.board import Board, Position, NO_MOVE, opposite_color, check_color
from ..game.rules import get_valid_moves, apply_move, valid_move_mask, apply_move_bit
from .evaluation import evaluate_board, WEIGHT_MASKS

logger = logging.getLogger(__name__)

# Below the root, corners are tried first and X-squares last
_MOVE_ORDER = [mask for _, mask in WEIGHT_MASKS]


@dataclass
class SearchStats:
    """Counters collected during a search. Purely informational."""
    nodes: int = 0
    leaves: int = 0
    cutoffs: int = 0


def _ordered_moves(moves: int) -> Iterator[int]:
    for mask in _MOVE_ORDER:
        group = moves & mask
        while group:
            low = group & -group
            yield low
            group ^= low


def minimax(board: Board, depth: int, is_maximizing: bool, perspective: int,
            alpha: float = -math.inf, beta: float = math.inf,
            stats: Optional[SearchStats] = None) -> float:
    """
    Score a position by searching `depth` plies ahead.

    Args:
        board: Position to score
        depth: Plies left to search; 0 scores the position statically
        is_maximizing: True when `perspective` is the side to act
        perspective: Color whose evaluation is being maximised
        alpha: Best score the maximiser is already assured of
        beta: Best score the minimiser is already assured of
        stats: Optional counters updated in place

    Returns:
        The minimax value of the position for `perspective` when it lies
        inside (alpha, beta); otherwise a bound on the far side of the window

    A side with no legal move ends the line: the node is scored statically
    instead of searching on after a pass. Children are visited strongest
    square first, which changes how much is pruned but not the value.
    """
    if stats is not None:
        stats.nodes += 1

    if depth == 0:
        if stats is not None:
            stats.leaves += 1
        return evaluate_board(board, perspective)

    current = perspective if is_maximizing else opposite_color(perspective)
    moves = valid_move_mask(board, current)
    if not moves:
        if stats is not None:
            stats.leaves += 1
        return evaluate_board(board, perspective)

    if is_maximizing:
        best = -math.inf
        for move in _ordered_moves(moves):
            child = apply_move_bit(board, move, current)
            score = minimax(child, depth - 1, False, perspective, alpha, beta, stats)
            best = max(best, score)
            alpha = max(alpha, best)
            if beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break
    else:
        best = math.inf
        for move in _ordered_moves(moves):
            child = apply_move_bit(board, move, current)
            score = minimax(child, depth - 1, True, perspective, alpha, beta, stats)
            best = min(best, score)
            beta = min(beta, best)
            if beta <= alpha:
                if stats is not None:
                    stats.cutoffs += 1
                break

    return best


def find_best_move(board: Board, color: int, depth: int,
                   stats: Optional[SearchStats] = None) -> Position:
    """
    Pick the best move for `color` with a `depth`-ply minimax search.

    Moves are tried in row-major order and a later move only replaces the
    current choice if it scores strictly higher, so ties go to the first.
    The best score so far is passed down as alpha: a move that cannot beat
    it comes back at or below it and is never chosen.

    Returns:
        (row, col) of the chosen move, or NO_MOVE if `color` cannot move
    """
    check_color(color)
    if depth < 1:
        raise ValueError(f"Search depth must be at least 1, got {depth}")

    moves = get_valid_moves(board, color)
    if not moves:
        return NO_MOVE

    best_move = moves[0]
    best_score = -math.inf
    for row, col in moves:
        child = apply_move(board, row, col, color)
        score = minimax(child, depth - 1, False, color, best_score, math.inf, stats)
        if score > best_score:
            best_score = score
            best_move = (row, col)

    logger.debug("depth %d search chose %s (score %s) from %d moves",
                 depth, best_move, best_score, len(moves))
    return best_move
