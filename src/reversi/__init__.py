"""
Reversi rules engine and computer player.
"""
from .game import (
    Board, ReversiGame, Phase, GameStateError, OutOfBoardError,
    EMPTY, BLACK, WHITE, NO_MOVE, create_initial_board, opposite_color,
    is_valid_move, get_flippable_cells, get_valid_moves, apply_move, calculate_score,
)
from .search import Difficulty, evaluate_board, minimax, find_best_move, select_move

__version__ = "0.2"
