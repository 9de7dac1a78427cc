"""
Reversi game module.
Handles turn order between a human and the computer.
"""
import logging
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any, Union

from ..config import Config, get_default_config
from ..search.strategies import Difficulty, make_rng, select_move
from .board import Board, Position, BLACK, WHITE, NO_MOVE, opposite_color, check_color
from .rules import Score, get_valid_moves, get_flippable_cells, calculate_score, next_to_move, get_winner

logger = logging.getLogger(__name__)

COLOR_NAMES = {BLACK: 'Black', WHITE: 'White'}


class Phase(Enum):
    AWAITING_HUMAN = 'awaiting_human'
    COMPUTER_THINKING = 'computer_thinking'
    GAME_OVER = 'game_over'


class GameStateError(RuntimeError):
    """Raised when an action is attempted in the wrong phase of the game."""


def parse_color(value: Union[int, str]) -> int:
    """Accept BLACK/WHITE or their names."""
    if isinstance(value, str):
        names = {'black': BLACK, 'white': WHITE}
        try:
            return names[value.strip().lower()]
        except KeyError:
            raise ValueError(f"Unknown color {value!r}; expected 'black' or 'white'") from None
    check_color(value)
    return value


class ReversiGame:
    """
    A game between a human and the computer.

    The game is a small state machine: it is either waiting for the human,
    waiting for the computer, or over. Moves are applied to a fresh board
    and the next phase is derived from who can still move. The thinking
    delay is reported for the front end to honour; the game itself never
    sleeps.
    """

    def __init__(self, human_color: Union[int, str, None] = None,
                 difficulty: Union[Difficulty, str, None] = None,
                 seed: Optional[int] = None, config: Optional[Config] = None):
        """
        Initialize a new game.

        Args:
            human_color: Color played by the human (BLACK moves first);
                `config.play.human_color` if None
            difficulty: Computer difficulty tier; `config.play.difficulty` if None
            seed: Seed for the computer's random choices
            config: Configuration object. If None, uses default config.
        """
        self.config = config if config is not None else get_default_config()
        if human_color is None:
            human_color = self.config.play.human_color
        if difficulty is None:
            difficulty = self.config.play.difficulty
        self.human_color = parse_color(human_color)
        self.computer_color = opposite_color(self.human_color)
        self.difficulty = Difficulty.parse(difficulty)
        self.rng = make_rng(seed)
        self.reset()

    def reset(self, board: Optional[Board] = None, to_move: int = BLACK) -> None:
        """
        Start over, from the initial position or from a given one.

        Args:
            board: Starting position (default: standard initial board)
            to_move: Color to act first; if it cannot move the other side does
        """
        check_color(to_move)
        self.board = board if board is not None else Board.initial()
        self.move_history: List[Dict[str, Any]] = []

        if get_valid_moves(self.board, to_move):
            self.current_color = to_move
        else:
            self.current_color = next_to_move(self.board, to_move)
        self._update_phase()

    def _update_phase(self) -> None:
        if self.current_color is None:
            self.phase = Phase.GAME_OVER
        elif self.current_color == self.human_color:
            self.phase = Phase.AWAITING_HUMAN
        else:
            self.phase = Phase.COMPUTER_THINKING

    def _play(self, row: int, col: int, color: int) -> bool:
        flipped = get_flippable_cells(self.board, row, col, color)
        if not flipped:
            return False

        board_before = self.board
        self.board = board_before.with_discs(color, [(row, col)] + flipped)
        self.move_history.append({
            'color': color,
            'move': (row, col),
            'flipped': flipped,
            'board_before': board_before,
            'board_after': self.board,
        })

        self.current_color = next_to_move(self.board, color)
        if self.current_color == color:
            logger.debug("%s has no legal move and passes", COLOR_NAMES[opposite_color(color)])
        self._update_phase()
        if self.phase is Phase.GAME_OVER:
            logger.debug("Game over: %s", self.get_score())
        return True

    def make_move(self, row: int, col: int) -> bool:
        """
        Play the human's move.

        Returns:
            bool: True if the move was made; False if it is not the human's
            turn, the game is over, or the move is not legal
        """
        if self.phase is not Phase.AWAITING_HUMAN:
            return False
        return self._play(row, col, self.human_color)

    def computer_move(self) -> Position:
        """
        Let the computer choose and play its move.

        Returns:
            The (row, col) the computer played

        Raises:
            GameStateError: if it is not the computer's turn
        """
        if self.phase is not Phase.COMPUTER_THINKING:
            raise GameStateError(f"Computer cannot move while {self.phase.value}")

        move = select_move(self.board, self.computer_color, self.difficulty,
                           rng=self.rng, config=self.config.search)
        if move == NO_MOVE:
            raise GameStateError("Computer has no legal move on its turn")

        self._play(move[0], move[1], self.computer_color)
        logger.debug("Computer (%s) played %s", self.difficulty.value, move)
        return move

    def thinking_delay(self) -> float:
        """Seconds the front end should wait before showing the computer's move."""
        if not self.config.play.use_thinking_delay:
            return 0.0
        return float(self.config.play.thinking_delays.get(self.difficulty.value, 0.0))

    def get_valid_moves(self) -> List[Tuple[int, int]]:
        """
        Get all legal moves for the side to act.

        Returns:
            List of (row, col) tuples; empty once the game is over
        """
        if self.current_color is None:
            return []
        return get_valid_moves(self.board, self.current_color)

    def is_human_turn(self) -> bool:
        return self.phase is Phase.AWAITING_HUMAN

    def is_game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def get_winner(self) -> Optional[int]:
        """
        Get the winner of the game.

        Returns:
            int: BLACK, WHITE, or 0 for draw, None if game not over
        """
        return get_winner(self.board) if self.is_game_over() else None

    def get_score(self) -> Score:
        return calculate_score(self.board)

    def get_move_history(self) -> List[Dict[str, Any]]:
        return self.move_history.copy()

    def copy(self) -> 'ReversiGame':
        """Create a copy of the game; boards are immutable so they are shared."""
        new_game = ReversiGame.__new__(ReversiGame)
        new_game.config = self.config
        new_game.human_color = self.human_color
        new_game.computer_color = self.computer_color
        new_game.difficulty = self.difficulty
        new_game.rng = make_rng()
        new_game.rng.bit_generator.state = self.rng.bit_generator.state
        new_game.board = self.board
        new_game.current_color = self.current_color
        new_game.phase = self.phase
        new_game.move_history = self.move_history.copy()
        return new_game

    def __str__(self) -> str:
        score = self.get_score()
        status = [str(self.board), f"Score - Black: {score.black}, White: {score.white}"]

        if self.is_game_over():
            winner = self.get_winner()
            if winner == 0:
                status.append("Game over! It's a draw!")
            else:
                status.append(f"Game over! {COLOR_NAMES[winner]} wins!")
        else:
            who = 'You' if self.is_human_turn() else 'Computer'
            status.append(f"To move: {COLOR_NAMES[self.current_color]} ({who})")

        return "\n".join(status)
