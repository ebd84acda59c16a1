#!/usr/bin/env python
"""
Run one simulated data collection and print the resulting indices.

Parameters come from a named preset (simulation/params/*.yaml) or from the
command line. The run uses generic placeholder items, so no item pool or
language model is needed.
"""

from pathlib import Path

import pandas as pd
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from psychometrics_lab.core.exceptions import InvalidInputError
from psychometrics_lab.core.utils import get_rng
from psychometrics_lab.items.pool import generic_items
from psychometrics_lab.norms.scales import ScaleType
from psychometrics_lab.norms.transform import (
    population_curves,
    transform_result_score,
)
from psychometrics_lab.simulation.config import (
    DEFAULT_CONSTRUCT_QUALITY,
    DEFAULT_ITEM_COHESION,
    DEFAULT_SAMPLE_SIZE,
    PresetConfig,
    SimulationParameters,
)
from psychometrics_lab.simulation.data_models import SimulationResult
from psychometrics_lab.simulation.diagnostics import (
    classify_reliability,
    diagnose_item,
    judge_fit,
)
from psychometrics_lab.simulation.engine import (
    distribution_to_dataframe,
    information_to_dataframe,
    run_simulation,
)
from psychometrics_lab.simulation.history import RunHistory
from psychometrics_lab.simulation.presets import (
    get_available_presets,
    get_preset,
)

console = Console(force_terminal=True, legacy_windows=True)
app = typer.Typer()


def _good(flag: bool) -> str:
    return "[green]good[/green]" if flag else "[red]poor[/red]"


def print_indices(result: SimulationResult) -> None:
    rel = result.reliability
    val = result.validity
    fit = result.fit
    verdict = judge_fit(fit)

    table = Table(title="Psychometric Indices")
    table.add_column("Index", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Reading")

    table.add_row(
        "Cronbach's alpha",
        f"{rel.cronbach_alpha:.3f}",
        classify_reliability(rel.cronbach_alpha).value,
    )
    table.add_row("Split-half", f"{rel.split_half_reliability:.3f}", "")
    table.add_row(
        "SEM",
        f"{rel.sem:.2f}",
        f"95% CI +/- {rel.confidence_interval:.2f}",
    )
    table.add_row(
        "Mean / SD",
        f"{rel.mean_score:.1f} / {rel.standard_deviation:.1f}",
        f"max score {rel.max_score:.0f}",
    )
    table.add_row("Variance explained", f"{val.variance_explained:.1f}%", "")
    table.add_row("Convergent validity", f"{val.convergent_validity:.2f}", "")
    table.add_row(
        "Discriminant validity", f"{val.discriminant_validity:.2f}", ""
    )
    table.add_row("Criterion validity", f"{val.criterion_validity:.2f}", "")
    table.add_row("CFI", f"{fit.cfi:.3f}", _good(verdict.cfi_good))
    table.add_row("RMSEA", f"{fit.rmsea:.3f}", _good(verdict.rmsea_good))
    table.add_row("SRMR", f"{fit.srmr:.3f}", "")
    console.print(table)


def print_group_comparison(result: SimulationResult) -> None:
    groups = result.group_comparison
    console.print(
        Panel(
            f"Control mean: [cyan]{groups.control_group_mean:.1f}[/cyan]\n"
            f"Clinical mean: [cyan]{groups.clinical_group_mean:.1f}[/cyan]\n"
            f"Cohen's d: [cyan]{groups.effect_size:.2f}[/cyan]\n"
            f"Mann-Whitney U: [cyan]{groups.u_value}[/cyan]\n"
            f"p (approximate): [cyan]{groups.p_value:.3f}[/cyan]",
            title="Known-groups Validity",
        )
    )


def print_items(result: SimulationResult) -> None:
    table = Table(title="Item Calibration")
    table.add_column("Item", style="bold")
    table.add_column("Difficulty", justify="right")
    table.add_column("Discrimination", justify="right")
    table.add_column("Diagnosis")

    for item in result.items:
        diagnosis = diagnose_item(item)
        style = "green" if diagnosis.is_good else "yellow"
        table.add_row(
            item.text,
            f"{item.difficulty:.2f}",
            f"{item.discrimination:.2f}",
            f"[{style}]{diagnosis.summary}[/{style}]",
        )
    console.print(table)


@app.command()
def main(
    preset: str | None = typer.Option(
        None,
        help="Named preset; overrides the parameter options",
    ),
    n_items: int = typer.Option(10, help="Number of generic items"),
    sample_size: int = typer.Option(
        DEFAULT_SAMPLE_SIZE, help="Number of simulated respondents"
    ),
    item_cohesion: float = typer.Option(
        DEFAULT_ITEM_COHESION, help="Average inter-item correlation"
    ),
    construct_quality: float = typer.Option(
        DEFAULT_CONSTRUCT_QUALITY, help="Theoretical strength of the trait"
    ),
    seed: int | None = typer.Option(
        None, help="Random seed for reproducibility"
    ),
    raw_score: float | None = typer.Option(
        None, help="Raw score to express on a norm scale"
    ),
    scale: ScaleType = typer.Option(ScaleType.STEN, help="Norm scale"),
    output_dir: Path | None = typer.Option(
        None, help="Directory for CSV exports"
    ),
) -> None:
    """Simulate a data collection and print the psychometric indices."""
    try:
        if preset is not None:
            config = get_preset(preset)
        else:
            config = PresetConfig(
                n_items=n_items,
                sample_size=sample_size,
                item_cohesion=item_cohesion,
                construct_quality=construct_quality,
                random_seed=seed,
            )
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        presets = ", ".join(get_available_presets())
        console.print(f"Available presets: {presets}")
        raise typer.Exit(1) from e

    parameters: SimulationParameters = config.parameters
    console.print(
        Panel(
            f"Items: [cyan]{config.n_items}[/cyan]\n"
            f"Sample size: [cyan]{parameters.sample_size}[/cyan]\n"
            f"Item cohesion: [cyan]{parameters.item_cohesion}[/cyan]\n"
            f"Construct quality: [cyan]{parameters.construct_quality}[/cyan]\n"
            f"Seed: [cyan]{config.random_seed}[/cyan]",
            title=f"Configuration{f' ({preset})' if preset else ''}",
        )
    )

    rng = get_rng(config.random_seed)
    result = run_simulation(generic_items(config.n_items), parameters, rng)
    history = RunHistory()
    history.append(result)

    print_indices(result)
    print_group_comparison(result)
    print_items(result)

    if raw_score is not None:
        try:
            norm = transform_result_score(raw_score, result, scale)
        except InvalidInputError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1) from e
        console.print(
            Panel(
                f"Raw score: [cyan]{norm.raw_score:g}[/cyan] "
                f"(z = {norm.z_score:.2f}, percentile {norm.percentile:.0f})\n"
                f"{scale.value}: [cyan]{norm.final_score}[/cyan] "
                f"({norm.band.value})\n"
                f"95% band: [cyan]{norm.ci_lower:.1f} - "
                f"{norm.ci_upper:.1f}[/cyan]",
                title="Norm Score",
            )
        )

    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        distribution_to_dataframe(result).to_csv(
            output_dir / "distribution.csv", index=False
        )
        information_to_dataframe(result).to_csv(
            output_dir / "test_information.csv", index=False
        )
        history.to_dataframe().to_csv(output_dir / "history.csv", index=False)
        pd.DataFrame(
            [point.model_dump() for point in population_curves(result)]
        ).to_csv(output_dir / "norm_curves.csv", index=False)
        console.print(f"[green]CSV files written to {output_dir}[/green]")


if __name__ == "__main__":
    app()
