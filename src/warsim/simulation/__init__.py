"""War game engine and batch driver."""

from warsim.simulation.deck import Card, build_deck, deck_size, shuffle_cards
from warsim.simulation.state import GameConfig, GameStats, PlayerPiles, Winner
from warsim.simulation.war import WarGame, draw_card, play_war_game
from warsim.simulation.batch import (
    ConfigError,
    GameOutcome,
    SimulationConfig,
    derive_game_seeds,
    run_simulations,
    simulate_game,
)

__all__ = [
    # Deck
    "Card",
    "build_deck",
    "deck_size",
    "shuffle_cards",
    # State
    "GameConfig",
    "GameStats",
    "PlayerPiles",
    "Winner",
    # Engine
    "WarGame",
    "draw_card",
    "play_war_game",
    # Batch
    "ConfigError",
    "GameOutcome",
    "SimulationConfig",
    "derive_game_seeds",
    "run_simulations",
    "simulate_game",
]
