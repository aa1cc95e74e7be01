"""CSV export of per-game results."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import List, Sequence

from warsim.simulation.batch import SimulationConfig
from warsim.simulation.state import GameStats

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Game Number",
    "Tricks",
    "Wars",
    "Deep Wars",
    "Average War Depth",
    "Shuffles A",
    "Shuffles B",
    "Game Duration (ms)",
    "Finished",
    "Trick Wins A",
    "Trick Wins B",
    "Winner",
]


def _flag(value: bool) -> str:
    return "true" if value else "false"


def results_filename(config: SimulationConfig) -> str:
    """File name encoding every setting of the batch."""
    seed = config.seed or 0
    return (
        f"war_results_hand{config.hand_time_ms}_shuffle{config.shuffle_time_ms}"
        f"_jokers{_flag(config.include_jokers)}_seed{seed}"
        f"_games{config.games}_maxtime{config.max_game_time_ms}.csv"
    )


def stats_to_row(stats: GameStats) -> List[str]:
    return [
        str(stats.game_number),
        str(stats.tricks),
        str(stats.wars),
        str(stats.deep_wars),
        f"{stats.average_war_depth:.2f}",
        str(stats.shuffles_a),
        str(stats.shuffles_b),
        str(stats.duration_ms),
        _flag(stats.finished),
        str(stats.trick_wins_a),
        str(stats.trick_wins_b),
        stats.winner.value if stats.winner is not None else "",
    ]


def write_results_csv(stats: Sequence[GameStats], output_path: Path) -> Path:
    """Write one row per game to output_path.

    Raises:
        OSError: If the file cannot be written
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADERS)
        for game in stats:
            writer.writerow(stats_to_row(game))

    logger.debug(f"Wrote {len(stats)} rows to {output_path}")
    return output_path
