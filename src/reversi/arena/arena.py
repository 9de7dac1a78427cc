"""
Arena for running tournaments between difficulty tiers with ELO rating.
"""
import os
import json
import time
import logging
from dataclasses import dataclass, asdict, field
from typing import Any, List, Dict, Optional, Union
from tqdm import tqdm

from ..config import SearchConfig
from ..game.board import Board, Position, BLACK, WHITE, NO_MOVE
from ..game.rules import apply_move, calculate_score, next_to_move
from ..search.strategies import Difficulty, make_rng, select_move

logger = logging.getLogger(__name__)

# Game result from black's side
BLACK_WIN, DRAW, WHITE_WIN = 1.0, 0.5, 0.0


@dataclass
class PlayerRecord:
    """Rating and win/draw/loss tally of one tier."""
    rating: float
    wins: int = 0
    draws: int = 0
    losses: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.draws + self.losses

    def tally(self, score: float):
        if score == 1.0:
            self.wins += 1
        elif score == 0.0:
            self.losses += 1
        else:
            self.draws += 1


@dataclass
class GameRecord:
    """One finished arena game."""
    black: str
    white: str
    result: float
    black_discs: int
    white_discs: int
    moves: List[Position] = field(default_factory=list)


class ELORatingSystem:
    """
    Zero-sum ELO ratings keyed by player id.

    Each game moves both ratings by k * (actual - expected) in opposite
    directions, so the sum of all ratings never changes.
    """

    def __init__(self, k: float = 32.0, initial_rating: float = 1500.0):
        self.k = k
        self.initial_rating = initial_rating
        self.players: Dict[str, PlayerRecord] = {}

    def add_player(self, player_id: str):
        self.players.setdefault(player_id, PlayerRecord(self.initial_rating))

    def rating(self, player_id: str) -> float:
        record = self.players.get(player_id)
        return record.rating if record is not None else self.initial_rating

    @staticmethod
    def expected_score(rating_a: float, rating_b: float) -> float:
        """Expected score of a player rated `rating_a` against one rated `rating_b`."""
        return 1.0 / (1.0 + 10.0 ** ((rating_b - rating_a) / 400.0))

    def update(self, player_a: str, player_b: str, score_a: float) -> float:
        """
        Record a game between two players.

        Args:
            player_a: ID of player A
            player_b: ID of player B
            score_a: Score for player A (1.0 for win, 0.5 for draw, 0.0 for loss)

        Returns:
            The rating change of player A
        """
        self.add_player(player_a)
        self.add_player(player_b)
        a, b = self.players[player_a], self.players[player_b]

        delta = self.k * (score_a - self.expected_score(a.rating, b.rating))
        a.rating += delta
        b.rating -= delta
        a.tally(score_a)
        b.tally(1.0 - score_a)
        return delta

    def leaderboard(self) -> List[Dict[str, Any]]:
        """Players sorted by rating, highest first."""
        rows = [dict(player_id=player_id, games=record.games, **asdict(record))
                for player_id, record in self.players.items()]
        rows.sort(key=lambda row: row['rating'], reverse=True)
        return rows

    def to_dict(self) -> Dict[str, Any]:
        return {
            'k': self.k,
            'initial_rating': self.initial_rating,
            'players': {player_id: asdict(record) for player_id, record in self.players.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ELORatingSystem':
        elo = cls(k=data.get('k', 32.0), initial_rating=data.get('initial_rating', 1500.0))
        elo.players = {player_id: PlayerRecord(**record)
                       for player_id, record in data.get('players', {}).items()}
        return elo

    def save(self, filepath: str):
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: str) -> 'ELORatingSystem':
        with open(filepath, 'r') as f:
            return cls.from_dict(json.load(f))


class TierPlayer:
    """A computer player fixed to one difficulty tier."""

    def __init__(self, player_id: str, difficulty: Union[Difficulty, str],
                 seed: Optional[int] = None, search_config: Optional[SearchConfig] = None):
        self.player_id = player_id
        self.difficulty = Difficulty.parse(difficulty)
        self.seed = seed
        self.search_config = search_config if search_config is not None else SearchConfig()
        self.rng = make_rng(seed)

    def get_move(self, board: Board, color: int) -> Position:
        return select_move(board, color, self.difficulty, rng=self.rng, config=self.search_config)

    def reset(self):
        """Restart the random stream from the player's seed."""
        self.rng = make_rng(self.seed)


class Arena:
    """
    Arena for running tournaments between tier players.

    A player's random stream carries on from game to game, so repeated
    pairings of a random tier play different games. `run_tournament`
    rewinds every stream once at the start, which makes a whole
    tournament reproducible from the players' seeds.
    """

    def __init__(self, elo_system: Optional[ELORatingSystem] = None):
        self.elo = elo_system if elo_system is not None else ELORatingSystem()
        self.players: Dict[str, TierPlayer] = {}
        self.games: List[GameRecord] = []

    def add_player(self, player: TierPlayer):
        self.players[player.player_id] = player
        self.elo.add_player(player.player_id)

    def play_game(self, black_id: str, white_id: str, verbose: bool = False) -> float:
        """
        Play a single game and append it to `games`.

        Args:
            black_id: ID of the player with the black discs (moves first)
            white_id: ID of the player with the white discs
            verbose: Whether to log every move

        Returns:
            1.0 if black wins, 0.5 for a draw, 0.0 if white wins
        """
        if black_id not in self.players or white_id not in self.players:
            raise ValueError(f"One or both players not found: {black_id}, {white_id}")

        players = {BLACK: self.players[black_id], WHITE: self.players[white_id]}
        board = Board.initial()
        moves: List[Position] = []
        color: Optional[int] = BLACK
        while color is not None:
            player = players[color]
            move = player.get_move(board, color)
            if move == NO_MOVE:
                raise RuntimeError(f"{player.player_id} returned no move on its turn")
            board = apply_move(board, move[0], move[1], color)
            if board is None:
                raise RuntimeError(f"{player.player_id} played an illegal move {move}")
            moves.append(move)
            if verbose:
                logger.info("%s plays %s\n%s", player.player_id, move, board)
            color = next_to_move(board, color)

        score = calculate_score(board)
        if score.black > score.white:
            result = BLACK_WIN
        elif score.white > score.black:
            result = WHITE_WIN
        else:
            result = DRAW
        self.games.append(GameRecord(black_id, white_id, result, score.black, score.white, moves))

        if verbose:
            logger.info("Game over. %s (Black): %d, %s (White): %d",
                        black_id, score.black, white_id, score.white)
        return result

    def run_tournament(self, rounds: int = 10, verbose: bool = False) -> Dict[str, Any]:
        """
        Run a round-robin tournament between all players.

        Every pairing is played once per round, with colors alternating
        between rounds.

        Args:
            rounds: Number of rounds to play
            verbose: Whether to log individual moves

        Returns:
            Dictionary with per-matchup results, the games and the final leaderboard
        """
        player_ids = list(self.players)
        if len(player_ids) < 2:
            raise ValueError("Need at least 2 players for a tournament")

        for player in self.players.values():
            player.reset()

        pairings = [(a, b) for i, a in enumerate(player_ids) for b in player_ids[i + 1:]]
        matchups = {f"{a}_vs_{b}": {'player1': a, 'player2': b, 'wins1': 0, 'wins2': 0, 'draws': 0}
                    for a, b in pairings}
        first_game = len(self.games)
        start = time.time()

        for round_num in tqdm(range(rounds), desc="Rounds", disable=verbose):
            for a, b in pairings:
                black, white = (a, b) if round_num % 2 == 0 else (b, a)
                result = self.play_game(black, white, verbose=verbose)
                self.elo.update(black, white, result)

                score_a = result if black == a else 1.0 - result
                key = 'wins1' if score_a == 1.0 else 'wins2' if score_a == 0.0 else 'draws'
                matchups[f"{a}_vs_{b}"][key] += 1

            logger.debug("Round %d done: %s", round_num + 1, self.elo.leaderboard())

        games = self.games[first_game:]
        return {
            'games_played': len(games),
            'matchups': matchups,
            'games': [asdict(game) for game in games],
            'duration': time.time() - start,
            'leaderboard': self.elo.leaderboard(),
        }

    def print_leaderboard(self):
        print("\nCurrent Leaderboard:")
        print("Rank  Player ID               Rating    W    D    L")
        print("----  ---------------------  -------  ---  ---  ---")
        for i, row in enumerate(self.elo.leaderboard(), 1):
            print(f"{i:4d}  {row['player_id']:22s}  {row['rating']:7.1f}"
                  f"  {row['wins']:3d}  {row['draws']:3d}  {row['losses']:3d}")

    def save_results(self, filepath: str):
        """Save the leaderboard, plus the full ELO state alongside it."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        self.elo.save(os.path.splitext(filepath)[0] + '_elo.json')
        with open(filepath, 'w') as f:
            json.dump(self.elo.leaderboard(), f, indent=2)
