"""Tests for batch summary statistics."""

import json

import pytest

from warsim.analysis.summary import describe, print_summary, save_json, summarize
from warsim.simulation.state import GameStats, Winner


def finished_game(number: int, tricks: int, winner: Winner, **fields) -> GameStats:
    return GameStats(
        game_number=number, tricks=tricks, finished=True, winner=winner, **fields
    )


@pytest.fixture
def batch_stats():
    return [
        finished_game(1, 10, Winner.A, wars=2, total_war_depth=3, duration_ms=60_000),
        finished_game(2, 20, Winner.B, wars=0, duration_ms=180_000),
        GameStats(game_number=3, tricks=30, finished=False, duration_ms=120_000),
        GameStats.failed_game(4),
    ]


def test_describe() -> None:
    field = describe("Tricks", [10, 20])
    assert field.mean == 15.0
    assert field.min == 10.0
    assert field.max == 20.0
    assert field.std == 5.0  # Population std


def test_describe_empty() -> None:
    field = describe("Wars", [])
    assert (field.mean, field.min, field.max, field.std) == (0.0, 0.0, 0.0, 0.0)


def test_summarize_excludes_failed_games(batch_stats) -> None:
    summary = summarize(batch_stats)

    assert summary.total_games == 4
    assert summary.errors == 1
    assert summary.valid_games == 3

    tricks = summary.fields[0]
    assert tricks.name == "Tricks"
    assert tricks.mean == 20.0
    assert tricks.min == 10.0
    assert tricks.max == 30.0


def test_summarize_average_war_depth(batch_stats) -> None:
    depth = next(f for f in summarize(batch_stats).fields if f.name == "Average War Depth")
    assert depth.max == 1.5
    assert depth.min == 0.0
    assert depth.mean == pytest.approx(0.5)


def test_summarize_game_time_in_minutes(batch_stats) -> None:
    game_time = summarize(batch_stats).game_time_minutes
    assert game_time.mean == pytest.approx(2.0)
    assert game_time.min == pytest.approx(1.0)
    assert game_time.max == pytest.approx(3.0)


def test_summarize_percentages(batch_stats) -> None:
    summary = summarize(batch_stats)

    assert summary.finished_games == 2
    assert summary.finished_pct == pytest.approx(200 / 3)
    assert summary.wins_a_pct == pytest.approx(100 / 3)
    assert summary.wins_b_pct == pytest.approx(100 / 3)


def test_summarize_all_failed() -> None:
    summary = summarize([GameStats.failed_game(1), GameStats.failed_game(2)])

    assert summary.errors == 2
    assert summary.finished_pct == 0.0
    assert all(f.mean == 0.0 for f in summary.fields)


def test_print_summary(batch_stats) -> None:
    lines = []
    print_summary(summarize(batch_stats), echo=lines.append)
    output = "\n".join(lines)

    assert "Total number of games played: 4" in output
    assert "Games that failed with an error: 1" in output
    assert "Tricks: Avg 20.00 (Min: 10, Max: 30, StdDev: 8.16)" in output
    assert "Finished games: 2 (66.67%)" in output
    assert "Player A wins: 33.33%" in output


def test_fractional_fields_print_with_decimals(batch_stats) -> None:
    """Test fields flagged with precision show min/max to two places."""
    lines = []
    print_summary(summarize(batch_stats), echo=lines.append)

    assert "Average War Depth: Avg 0.50 (Min: 0.00, Max: 1.50, StdDev: 0.71)" in lines
    assert "Game Time (minutes): Avg 2.00 (Min: 1.00, Max: 3.00, StdDev: 0.82)" in lines
    assert "Deep Wars: Avg 0.00 (Min: 0, Max: 0, StdDev: 0.00)" in lines


def test_describe_precision_controls_format() -> None:
    assert describe("Tricks", [1, 2]).format() == (
        "Tricks: Avg 1.50 (Min: 1, Max: 2, StdDev: 0.50)"
    )
    assert describe("Depth", [1, 2], precision=2).format() == (
        "Depth: Avg 1.50 (Min: 1.00, Max: 2.00, StdDev: 0.50)"
    )


def test_save_json(batch_stats, tmp_path) -> None:
    path = tmp_path / "out" / "summary.json"
    save_json(summarize(batch_stats), path)

    data = json.loads(path.read_text())
    assert data["total_games"] == 4
    assert data["errors"] == 1
    assert data["finished_games"] == 2
    names = [f["name"] for f in data["fields"]]
    assert names[0] == "Tricks"
    assert names[-1] == "Game Time (minutes)"
    assert "timestamp" in data
