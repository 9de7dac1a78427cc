"""
Reversi game module.
This package contains the board, the rules and the human-vs-computer game flow.
"""

from .board import (
    Board, Position, OutOfBoardError, EMPTY, BLACK, WHITE, SIZE, NO_MOVE,
    opposite_color, create_initial_board,
)
from .rules import (
    Score, DIRECTIONS, is_valid_move, get_flippable_cells, get_valid_moves, has_valid_move,
    apply_move, calculate_score, next_to_move, is_game_over, get_winner,
)
from .game import ReversiGame, Phase, GameStateError

__all__ = [
    'Board', 'Position', 'OutOfBoardError', 'EMPTY', 'BLACK', 'WHITE', 'SIZE', 'NO_MOVE',
    'opposite_color', 'create_initial_board',
    'Score', 'DIRECTIONS', 'is_valid_move', 'get_flippable_cells', 'get_valid_moves',
    'has_valid_move', 'apply_move', 'calculate_score', 'next_to_move', 'is_game_over', 'get_winner',
    'ReversiGame', 'Phase', 'GameStateError',
]
