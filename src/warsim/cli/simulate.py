"""CLI command for running batches of War simulations."""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

import click

from warsim.analysis.export import results_filename, write_results_csv
from warsim.analysis.summary import print_summary, save_json, summarize
from warsim.simulation.batch import ConfigError, SimulationConfig, run_simulations
from warsim.simulation.deck import deck_size

logger = logging.getLogger(__name__)


@click.command()
@click.option("--hand", type=int, default=500, show_default=True,
              help="Time to play a hand (in milliseconds)")
@click.option("--shuffle", type=int, default=15000, show_default=True,
              help="Time to shuffle (in milliseconds)")
@click.option("--jokers/--no-jokers", default=False, help="Include jokers in the deck")
@click.option("--seed", type=int, default=0, show_default=True,
              help="Random seed (0 for current time)")
@click.option("--games", type=int, default=100, show_default=True,
              help="Number of games to play")
@click.option("--maxtime", type=int, default=3_600_000, show_default=True,
              help="Maximum game time in milliseconds")
@click.option("--max-tricks", type=int, default=100_000, show_default=True,
              help="Trick limit before a game is cut off")
@click.option("--workers", type=int, default=1, show_default=True,
              help="Worker processes (results do not depend on this)")
@click.option("--output-dir", type=click.Path(file_okay=False), default=".",
              help="Directory for the results CSV")
@click.option("--summary-json", type=click.Path(dir_okay=False), default=None,
              help="Also save the summary as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    hand: int,
    shuffle: int,
    jokers: bool,
    seed: int,
    games: int,
    maxtime: int,
    max_tricks: int,
    workers: int,
    output_dir: str,
    summary_json: str | None,
    verbose: bool,
):
    """Simulate many games of War and report statistics."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(message)s',
    )

    config = SimulationConfig(
        hand_time_ms=hand,
        shuffle_time_ms=shuffle,
        include_jokers=jokers,
        seed=seed,
        games=games,
        max_game_time_ms=maxtime,
        max_tricks=max_tricks,
        workers=workers,
    )
    try:
        config.validate()
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    # Pin a clock-derived seed so the file name and output record it
    config = replace(config, seed=config.resolved_seed())
    click.echo(f"Seed: {config.seed}")
    click.echo(f"Deck size: {deck_size(jokers)}")

    start = time.perf_counter()
    stats = run_simulations(config)
    click.echo(f"Simulation completed in {time.perf_counter() - start:.2f}s")

    output_path = Path(output_dir) / results_filename(config)
    try:
        write_results_csv(stats, output_path)
    except OSError as e:
        logger.error(f"Error writing results: {e}")
        sys.exit(1)
    click.echo(f"Results written to {output_path}")

    summary = summarize(stats)
    print_summary(summary)

    if summary_json:
        save_json(summary, Path(summary_json))
        click.echo(f"Summary saved to {summary_json}")


if __name__ == "__main__":
    main()
