"""
Configuration parameters for Reversi.
"""
import os
from dataclasses import dataclass, asdict, field
from typing import Dict, Any
import json


@dataclass
class SearchConfig:
    """Configuration for the computer player's search depths."""
    hard_depth: int = 4
    expert_depth: int = 6
    expert_endgame_depth: int = 8
    expert_endgame_empty_threshold: int = 20  # Search deeper once this few cells remain


@dataclass
class PlayConfig:
    """Configuration for interactive games."""
    human_color: str = "black"
    difficulty: str = "easy"
    use_thinking_delay: bool = True
    # Seconds the computer "thinks" before its move is shown, per difficulty
    thinking_delays: Dict[str, float] = field(default_factory=lambda: {
        'beginner': 0.5,
        'easy': 0.8,
        'hard': 1.2,
        'expert': 1.5,
    })


@dataclass
class ArenaConfig:
    """Configuration for tier-vs-tier tournaments."""
    rounds: int = 10
    k: float = 32.0
    initial_rating: float = 1500.0
    output_dir: str = "tournament_results"
    elo_file: str = "elo_ratings.json"


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    log_dir: str = "logs"
    log_level: str = "INFO"
    log_to_file: bool = False
    verbose: bool = False


@dataclass
class Config:
    """Main configuration class."""
    project_name: str = "Reversi"
    seed: int = 42
    search: SearchConfig = field(default_factory=SearchConfig)
    play: PlayConfig = field(default_factory=PlayConfig)
    arena: ArenaConfig = field(default_factory=ArenaConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    def save(self, filepath: str):
        """Save config to JSON file."""
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        return cls(
            project_name=config_dict.get('project_name', 'Reversi'),
            seed=config_dict.get('seed', 42),
            search=SearchConfig(**config_dict.get('search', {})),
            play=PlayConfig(**config_dict.get('play', {})),
            arena=ArenaConfig(**config_dict.get('arena', {})),
            logging=LoggingConfig(**config_dict.get('logging', {}))
        )

    @classmethod
    def load(cls, filepath: str) -> 'Config':
        """Load config from JSON file."""
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)


def get_default_config() -> Config:
    """Get default configuration."""
    return Config()
