"""
Computer player strategies, one per difficulty tier.
"""
from enum import Enum
from typing import Callable, Dict, Optional, Union
import numpy as np

from ..config import SearchConfig
from ..game.board import Board, Position, NO_MOVE
from ..game.rules import get_valid_moves, get_flippable_cells
from .minimax import find_best_move


class Difficulty(Enum):
    BEGINNER = 'beginner'
    EASY = 'easy'
    HARD = 'hard'
    EXPERT = 'expert'

    @classmethod
    def parse(cls, value: Union['Difficulty', str]) -> 'Difficulty':
        """Accept a Difficulty or its name, case-insensitively."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ', '.join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r}; expected one of: {names}") from None


Strategy = Callable[[Board, int, np.random.Generator, SearchConfig], Position]


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def random_move(board: Board, color: int, rng: np.random.Generator,
                config: SearchConfig) -> Position:
    """Uniformly random legal move."""
    moves = get_valid_moves(board, color)
    if not moves:
        return NO_MOVE
    return moves[int(rng.integers(len(moves)))]


def greedy_move(board: Board, color: int, rng: np.random.Generator,
                config: SearchConfig) -> Position:
    """Legal move flipping the most discs; the first one wins ties."""
    moves = get_valid_moves(board, color)
    if not moves:
        return NO_MOVE

    best_move = moves[0]
    max_flips = 0
    for row, col in moves:
        flips = len(get_flippable_cells(board, row, col, color))
        if flips > max_flips:
            max_flips = flips
            best_move = (row, col)
    return best_move


def minimax_move(board: Board, color: int, rng: np.random.Generator,
                 config: SearchConfig) -> Position:
    return find_best_move(board, color, config.hard_depth)


def expert_move(board: Board, color: int, rng: np.random.Generator,
                config: SearchConfig) -> Position:
    """Minimax that reads deeper once the board is nearly full."""
    if board.empty_count() <= config.expert_endgame_empty_threshold:
        depth = config.expert_endgame_depth
    else:
        depth = config.expert_depth
    return find_best_move(board, color, depth)


STRATEGIES: Dict[Difficulty, Strategy] = {
    Difficulty.BEGINNER: random_move,
    Difficulty.EASY: greedy_move,
    Difficulty.HARD: minimax_move,
    Difficulty.EXPERT: expert_move,
}


def select_move(board: Board, color: int, difficulty: Union[Difficulty, str],
                rng: Optional[np.random.Generator] = None,
                config: Optional[SearchConfig] = None) -> Position:
    """
    Choose a move for `color` at the given difficulty.

    Args:
        board: Current position
        color: Side to move
        difficulty: Tier, as a Difficulty or its name
        rng: Random generator for the beginner tier; a fresh unseeded one if None
        config: Search depths; defaults if None

    Returns:
        (row, col) of the chosen move, or NO_MOVE if `color` cannot move
    """
    strategy = STRATEGIES[Difficulty.parse(difficulty)]
    if rng is None:
        rng = make_rng()
    if config is None:
        config = SearchConfig()
    return strategy(board, color, rng, config)
