"""Batch simulation of many War games.

Each game gets its own seed, derived up front from the batch seed, so a
batch produces the same records whether it runs in one process or is
spread over a process pool.
"""

from __future__ import annotations

import logging
import random
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

from warsim.simulation.state import GameConfig, GameStats
from warsim.simulation.war import play_war_game

logger = logging.getLogger(__name__)

SEED_BITS = 63
PROGRESS_EVERY = 1000


class ConfigError(ValueError):
    """Simulation configuration is invalid."""

    pass


@dataclass(frozen=True)
class SimulationConfig:
    """Configuration for a batch of games."""

    hand_time_ms: int = 500
    shuffle_time_ms: int = 15000
    include_jokers: bool = False
    seed: Optional[int] = None  # None or 0 = seed from current time
    games: int = 100
    max_game_time_ms: int = 3_600_000
    max_tricks: int = 100_000
    workers: int = 1

    def validate(self) -> None:
        """Check the configuration before any game runs.

        Raises:
            ConfigError: Listing every invalid setting
        """
        errors = []
        if self.hand_time_ms < 0:
            errors.append(f"hand time must be >= 0 (got {self.hand_time_ms})")
        if self.shuffle_time_ms < 0:
            errors.append(f"shuffle time must be >= 0 (got {self.shuffle_time_ms})")
        if self.max_game_time_ms <= 0:
            errors.append(f"max game time must be > 0 (got {self.max_game_time_ms})")
        if self.games <= 0:
            errors.append(f"number of games must be > 0 (got {self.games})")
        if self.max_tricks <= 0:
            errors.append(f"max tricks must be > 0 (got {self.max_tricks})")
        if self.workers <= 0:
            errors.append(f"workers must be > 0 (got {self.workers})")
        if errors:
            raise ConfigError("; ".join(errors))

    def game_config(self) -> GameConfig:
        return GameConfig(
            hand_time_ms=self.hand_time_ms,
            shuffle_time_ms=self.shuffle_time_ms,
            include_jokers=self.include_jokers,
            max_game_time_ms=self.max_game_time_ms,
            max_tricks=self.max_tricks,
        )

    def resolved_seed(self) -> int:
        """Explicit seed, or one taken from the clock."""
        if self.seed:
            return self.seed
        return time.time_ns()


@dataclass(frozen=True)
class GameOutcome:
    """Result of one game: its statistics, plus the error if it raised."""

    stats: GameStats
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def derive_game_seeds(seed: int, games: int) -> List[int]:
    """One reproducible seed per game, drawn from the batch seed."""
    rng = random.Random(seed)
    return [rng.getrandbits(SEED_BITS) for _ in range(games)]


def simulate_game(config: GameConfig, seed: int, game_number: int) -> GameOutcome:
    """Play one game, turning any exception into a failed-game record.

    Top-level so it can be pickled for the process pool.
    """
    try:
        stats = play_war_game(config, random.Random(seed))
    except Exception as e:
        logger.exception(f"Error in game {game_number}")
        return GameOutcome(
            stats=GameStats.failed_game(game_number),
            error=f"{type(e).__name__}: {e}",
        )
    stats.game_number = game_number
    return GameOutcome(stats=stats)


def _simulate_game_args(args: tuple) -> GameOutcome:
    return simulate_game(*args)


def run_simulations(config: SimulationConfig) -> List[GameStats]:
    """Run every game in the batch and return records in game order.

    Raises:
        ConfigError: If the configuration is invalid (nothing is run)
    """
    config.validate()

    game_config = config.game_config()
    seed = config.resolved_seed()
    logger.info(f"Batch seed: {seed}")
    seeds = derive_game_seeds(seed, config.games)
    tasks = [
        (game_config, seed, game_number)
        for game_number, seed in enumerate(seeds, start=1)
    ]

    logger.info(f"Starting simulation of {config.games} games...")

    if config.workers == 1:
        outcomes = []
        for task in tasks:
            outcomes.append(_simulate_game_args(task))
            if len(outcomes) % PROGRESS_EVERY == 0:
                logger.info(f"  Played {len(outcomes)}/{config.games} games")
    else:
        logger.info(f"Using {config.workers} worker processes")
        chunksize = max(1, len(tasks) // (config.workers * 4))
        with ProcessPoolExecutor(max_workers=config.workers) as executor:
            outcomes = list(executor.map(_simulate_game_args, tasks, chunksize=chunksize))

    errors = [o for o in outcomes if not o.ok]
    if errors:
        logger.error(f"{len(errors)} of {config.games} games failed")
        for outcome in errors:
            logger.error(f"  Game {outcome.stats.game_number}: {outcome.error}")

    return [o.stats for o in outcomes]
