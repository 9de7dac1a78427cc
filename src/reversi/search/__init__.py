"""
Computer player: position evaluation, minimax search and difficulty tiers.
"""
from .evaluation import evaluate_board, POSITION_WEIGHTS
from .minimax import minimax, find_best_move, SearchStats
from .strategies import Difficulty, STRATEGIES, select_move, make_rng

__all__ = ['evaluate_board', 'POSITION_WEIGHTS', 'minimax', 'find_best_move', 'SearchStats',
           'Difficulty', 'STRATEGIES', 'select_move', 'make_rng']
