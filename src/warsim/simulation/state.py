"""Mutable game state and per-game statistics."""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, List, Optional

from warsim.simulation.deck import Card


class Winner(Enum):
    """Player identifiers."""

    A = "A"
    B = "B"


@dataclass(frozen=True)
class GameConfig:
    """Rules and time costs for a single game."""

    hand_time_ms: int = 500
    shuffle_time_ms: int = 15000
    include_jokers: bool = False
    max_game_time_ms: int = 3_600_000  # One hour
    max_tricks: int = 100_000  # Safety net against endless games


@dataclass
class PlayerPiles:
    """A player's draw pile (front plays next) and winnings pile."""

    draw_pile: Deque[Card] = field(default_factory=deque)
    winnings_pile: List[Card] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.draw_pile) + len(self.winnings_pile)

    @property
    def is_empty(self) -> bool:
        return self.total == 0


@dataclass
class GameStats:
    """Statistics for one simulated game.

    Mutated while the game runs; treat as read-only once returned.
    """

    game_number: int = 0
    tricks: int = 0
    wars: int = 0
    deep_wars: int = 0
    total_war_depth: int = 0
    shuffles_a: int = 0
    shuffles_b: int = 0
    trick_wins_a: int = 0
    trick_wins_b: int = 0
    duration_ms: int = 0
    finished: bool = False
    winner: Optional[Winner] = None

    @property
    def average_war_depth(self) -> float:
        if self.wars == 0:
            return 0.0
        return self.total_war_depth / self.wars

    @property
    def failed(self) -> bool:
        """True for the sentinel record of a game that raised."""
        return self.tricks == -1

    @classmethod
    def failed_game(cls, game_number: int) -> "GameStats":
        """Sentinel record for a game whose simulation raised."""
        return cls(game_number=game_number, tricks=-1, finished=False)
