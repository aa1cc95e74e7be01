"""Aggregate statistics over a batch of simulated games."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Sequence

import click
import numpy as np

from warsim.simulation.state import GameStats, Winner

MS_PER_MINUTE = 60_000


@dataclass(frozen=True)
class FieldSummary:
    """Descriptive statistics for one per-game field."""

    name: str
    mean: float
    min: float
    max: float
    std: float  # Population standard deviation
    precision: int = 0  # Decimals shown for min/max

    def format(self) -> str:
        p = self.precision
        return (
            f"{self.name}: Avg {self.mean:.2f} "
            f"(Min: {self.min:.{p}f}, Max: {self.max:.{p}f}, StdDev: {self.std:.2f})"
        )


@dataclass(frozen=True)
class BatchSummary:
    """Summary of a batch of games (failed games excluded)."""

    total_games: int
    errors: int
    fields: tuple[FieldSummary, ...]
    game_time_minutes: FieldSummary
    finished_games: int
    finished_pct: float
    wins_a_pct: float
    wins_b_pct: float

    @property
    def valid_games(self) -> int:
        return self.total_games - self.errors


# (field name, extractor, min/max precision), in report order
FIELDS: List[tuple[str, Callable[[GameStats], float], int]] = [
    ("Tricks", lambda s: s.tricks, 0),
    ("Wars", lambda s: s.wars, 0),
    ("Deep Wars", lambda s: s.deep_wars, 0),
    ("Average War Depth", lambda s: s.average_war_depth, 2),
    ("Shuffles A", lambda s: s.shuffles_a, 0),
    ("Shuffles B", lambda s: s.shuffles_b, 0),
]


def describe(name: str, values: Sequence[float], precision: int = 0) -> FieldSummary:
    """Mean, min, max and population std of values (all zero if empty)."""
    if len(values) == 0:
        return FieldSummary(
            name=name, mean=0.0, min=0.0, max=0.0, std=0.0, precision=precision
        )
    data = np.asarray(values, dtype=float)
    return FieldSummary(
        name=name,
        mean=float(np.mean(data)),
        min=float(np.min(data)),
        max=float(np.max(data)),
        std=float(np.std(data)),
        precision=precision,
    )


def _pct(count: int, total: int) -> float:
    return count / total * 100 if total else 0.0


def summarize(stats: Sequence[GameStats]) -> BatchSummary:
    """Compute batch-level statistics from per-game records."""
    valid = [s for s in stats if not s.failed]

    fields = tuple(
        describe(name, [extract(s) for s in valid], precision)
        for name, extract, precision in FIELDS
    )
    game_time = describe(
        "Game Time (minutes)", [s.duration_ms / MS_PER_MINUTE for s in valid], 2
    )

    finished = sum(1 for s in valid if s.finished)
    wins_a = sum(1 for s in valid if s.winner is Winner.A)
    wins_b = sum(1 for s in valid if s.winner is Winner.B)

    return BatchSummary(
        total_games=len(stats),
        errors=len(stats) - len(valid),
        fields=fields,
        game_time_minutes=game_time,
        finished_games=finished,
        finished_pct=_pct(finished, len(valid)),
        wins_a_pct=_pct(wins_a, len(valid)),
        wins_b_pct=_pct(wins_b, len(valid)),
    )


def print_summary(summary: BatchSummary, echo: Callable[[str], None] = click.echo) -> None:
    """Print human-readable batch summary."""
    echo(f"Total number of games played: {summary.total_games}")
    if summary.errors:
        echo(f"Games that failed with an error: {summary.errors}")

    for field in summary.fields + (summary.game_time_minutes,):
        echo(field.format())
    echo(f"Finished games: {summary.finished_games} ({summary.finished_pct:.2f}%)")
    echo(f"Player A wins: {summary.wins_a_pct:.2f}%")
    echo(f"Player B wins: {summary.wins_b_pct:.2f}%")


def save_json(summary: BatchSummary, output_path: Path) -> None:
    """Save the batch summary as JSON."""
    data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "total_games": summary.total_games,
        "errors": summary.errors,
        "finished_games": summary.finished_games,
        "finished_pct": summary.finished_pct,
        "wins_a_pct": summary.wins_a_pct,
        "wins_b_pct": summary.wins_b_pct,
        "fields": [asdict(f) for f in summary.fields] + [asdict(summary.game_time_minutes)],
    }
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)
