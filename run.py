"""
Main script to play Reversi against the computer in the terminal.
"""
import os
import sys
import time
import argparse
from pathlib import Path

# Add src directory to path
sys.path.append(str(Path(__file__).parent.absolute() / "src"))

from reversi.config import Config, get_default_config
from reversi.logger import setup_logger
from reversi.game import ReversiGame, BLACK
from reversi.search import Difficulty


def parse_move(text: str):
    """Parse 'row col' or 'row,col' into a tuple, or None if malformed."""
    parts = text.replace(',', ' ').split()
    if len(parts) != 2 or not all(p.lstrip('-').isdigit() for p in parts):
        return None
    return int(parts[0]), int(parts[1])


def play(game: ReversiGame, logger) -> None:
    """Alternate between reading human moves and letting the computer play."""
    print(game)
    while not game.is_game_over():
        if game.is_human_turn():
            moves = game.get_valid_moves()
            text = input(f"\nYour move {moves} (row col, q to quit): ").strip()
            if text.lower() in ('q', 'quit', 'exit'):
                print("Bye!")
                return
            move = parse_move(text)
            if move is None:
                print("Enter a row and a column, e.g. '2 3'")
                continue
            try:
                made = game.make_move(*move)
            except ValueError as e:
                print(e)
                continue
            if not made:
                print(f"{move} is not a legal move")
                continue
        else:
            print("\nComputer is thinking...")
            time.sleep(game.thinking_delay())
            move = game.computer_move()
            print(f"Computer plays {move}")

        logger.logger.debug("Move %d: %s", len(game.move_history), move)
        print(game)

    score = game.get_score()
    logger.log_metrics({'black': score.black, 'white': score.white,
                        'moves': len(game.move_history)}, len(game.move_history))


def main():
    parser = argparse.ArgumentParser(description='Play Reversi against the computer')
    parser.add_argument('--config', type=str, default='configs/default_config.json',
                        help='Path to config file')
    parser.add_argument('--difficulty', type=str, default=None,
                        choices=[d.value for d in Difficulty],
                        help='Computer difficulty (default: from config)')
    parser.add_argument('--color', type=str, default=None, choices=['black', 'white'],
                        help='Your color; black moves first (default: from config)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for the computer\'s random choices')
    parser.add_argument('--no-delay', action='store_true',
                        help='Skip the computer\'s thinking pause')
    parser.add_argument('--verbose', action='store_true',
                        help='Log search details')
    args = parser.parse_args()

    # Load configuration
    if os.path.exists(args.config):
        print(f"Loading configuration from {args.config}")
        config = Config.load(args.config)
    else:
        config = get_default_config()

    if args.no_delay:
        config.play.use_thinking_delay = False
    if args.verbose:
        config.logging.verbose = True

    logger = setup_logger(config)
    game = ReversiGame(
        human_color=args.color,
        difficulty=args.difficulty,
        seed=args.seed,
        config=config,
    )

    side = 'Black (first)' if game.human_color == BLACK else 'White (second)'
    print(f"You play {side} against the {game.difficulty.value} computer.")

    try:
        play(game, logger)
    except (KeyboardInterrupt, EOFError):
        print("\nGame interrupted.")
    finally:
        logger.close()


if __name__ == "__main__":
    main()
