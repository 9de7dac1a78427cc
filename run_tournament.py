"""
Script for running tournaments between the Reversi difficulty tiers.
"""
import os
import sys
import json
import argparse
from pathlib import Path
from datetime import datetime

# Add src directory to path
sys.path.append(str(Path(__file__).parent.absolute() / "src"))

from reversi.config import Config, get_default_config
from reversi.logger import setup_logger
from reversi.arena import Arena, TierPlayer, ELORatingSystem
from reversi.search import Difficulty


def main():
    parser = argparse.ArgumentParser(description='Run a tournament between Reversi difficulty tiers')

    parser.add_argument('--config', type=str, default='configs/default_config.json',
                        help='Path to config file')
    parser.add_argument('--tiers', type=str, nargs='+',
                        default=[d.value for d in Difficulty],
                        choices=[d.value for d in Difficulty],
                        help='Difficulty tiers taking part')
    parser.add_argument('--rounds', type=int, default=None,
                        help='Number of rounds to play (default: from config)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Base seed for the random tiers (default: from config)')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory to save tournament results')
    parser.add_argument('--verbose', action='store_true',
                        help='Log every move')

    args = parser.parse_args()

    if os.path.exists(args.config):
        print(f"Loading configuration from {args.config}")
        config = Config.load(args.config)
    else:
        config = get_default_config()

    rounds = args.rounds if args.rounds is not None else config.arena.rounds
    seed = args.seed if args.seed is not None else config.seed
    output_dir = args.output_dir or config.arena.output_dir
    config.logging.verbose = args.verbose
    os.makedirs(output_dir, exist_ok=True)

    logger = setup_logger(config)

    # Initialize ELO rating system
    elo_file = os.path.join(output_dir, config.arena.elo_file)
    if os.path.exists(elo_file):
        logger.log_text(f"Loading ELO ratings from {elo_file}")
        elo = ELORatingSystem.load(elo_file)
    else:
        elo = ELORatingSystem(k=config.arena.k, initial_rating=config.arena.initial_rating)

    arena = Arena(elo)
    for i, tier in enumerate(dict.fromkeys(args.tiers)):
        arena.add_player(TierPlayer(tier, tier, seed=seed + i, search_config=config.search))

    logger.log_text(f"Running {rounds} rounds between: {', '.join(arena.players)}")
    try:
        results = arena.run_tournament(rounds=rounds, verbose=args.verbose)
    finally:
        logger.close()

    arena.print_leaderboard()

    # Save results
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    results_file = os.path.join(output_dir, f"tournament_{timestamp}.json")
    with open(results_file, 'w') as f:
        json.dump(results, f, indent=2)
    elo.save(elo_file)

    print(f"\nGames played: {results['games_played']} in {results['duration']:.1f}s")
    print(f"Results saved to {results_file}")


if __name__ == "__main__":
    main()
