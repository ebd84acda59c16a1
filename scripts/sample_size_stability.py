#!/usr/bin/env python
"""
Show how sample size affects the stability of Cronbach's alpha.

Repeats the simulation many times at each sample size with the same item
set and sliders, then reports the spread of alpha per N. Small samples
should show a visibly wider spread than large ones.
"""

import logging
from pathlib import Path

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from psychometrics_lab.core.utils import get_rng
from psychometrics_lab.items.pool import generic_items
from psychometrics_lab.simulation.config import (
    DEFAULT_CONSTRUCT_QUALITY,
    DEFAULT_ITEM_COHESION,
    SimulationParameters,
)
from psychometrics_lab.simulation.engine import run_simulation
from psychometrics_lab.simulation.history import RunHistory

DEFAULT_SAMPLE_SIZES = [30, 100, 200, 500, 1000]

logger = logging.getLogger("sample_size_stability")
# Silence per-run engine logs
logging.getLogger("psychometrics_lab").setLevel(logging.WARNING)

console = Console(force_terminal=True, legacy_windows=True)
app = typer.Typer()


def collect_runs(
    sample_sizes: list[int],
    repeats: int,
    n_items: int,
    item_cohesion: float,
    construct_quality: float,
    seed: int | None,
) -> RunHistory:
    """Run `repeats` simulations per sample size into one history."""
    rng = get_rng(seed)
    items = generic_items(n_items)
    history = RunHistory()
    for n in sample_sizes:
        parameters = SimulationParameters(
            sample_size=n,
            item_cohesion=item_cohesion,
            construct_quality=construct_quality,
        )
        for _ in range(repeats):
            history.append(run_simulation(items, parameters, rng))
        logger.info("Finished %d runs at N=%d", repeats, n)
    return history


def summarize_alpha(history: RunHistory) -> pd.DataFrame:
    """Mean, SD and range of alpha per sample size."""
    df = history.to_dataframe()
    summary = (
        df.groupby("sample_size")["cronbach_alpha"]
        .agg(["mean", "std", "min", "max"])
        .reset_index()
    )
    summary["range"] = summary["max"] - summary["min"]
    return summary


def print_summary(summary: pd.DataFrame) -> None:
    table = Table(title="Alpha Stability by Sample Size")
    table.add_column("N", justify="right", style="bold")
    table.add_column("Mean alpha", justify="right")
    table.add_column("SD", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Range", justify="right")

    for row in summary.itertuples(index=False):
        table.add_row(
            str(row.sample_size),
            f"{row.mean:.4f}",
            f"{row.std:.4f}",
            f"{row.min:.4f}",
            f"{row.max:.4f}",
            f"{row.range:.4f}",
        )
    console.print(table)


@app.command()
def main(
    sample_size: list[int] = typer.Option(
        DEFAULT_SAMPLE_SIZES,
        help="Sample size to test (repeat the option for several)",
    ),
    repeats: int = typer.Option(50, help="Runs per sample size"),
    n_items: int = typer.Option(10, help="Number of generic items"),
    item_cohesion: float = typer.Option(
        DEFAULT_ITEM_COHESION, help="Average inter-item correlation"
    ),
    construct_quality: float = typer.Option(
        DEFAULT_CONSTRUCT_QUALITY, help="Theoretical strength of the trait"
    ),
    seed: int | None = typer.Option(
        None, help="Random seed for reproducibility"
    ),
    output: Path | None = typer.Option(
        None, help="CSV path for the raw run history"
    ),
) -> None:
    """Report the spread of alpha across repeated runs at several N."""
    if repeats < 2:
        console.print("[red]Need at least 2 repeats to measure spread[/red]")
        raise typer.Exit(1)

    with console.status("[bold cyan]Simulating..."):
        history = collect_runs(
            sorted(set(sample_size)),
            repeats,
            n_items,
            item_cohesion,
            construct_quality,
            seed,
        )

    print_summary(summarize_alpha(history))

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        history.to_dataframe().to_csv(output, index=False)
        console.print(f"[green]Run history written to {output}[/green]")


if __name__ == "__main__":
    app()
