"""
End-to-end scenarios through the whole engine chain.

These mirror what a student sees when walking the wizard with the default
sliders, and check the numbers land where the teaching material says.
"""

import numpy as np
import pytest

from psychometrics_lab.core.utils import get_rng
from psychometrics_lab.items.pool import generic_items
from psychometrics_lab.norms.scales import ScaleType
from psychometrics_lab.norms.transform import ScoreBand, transform_result_score
from psychometrics_lab.simulation.config import SimulationParameters
from psychometrics_lab.simulation.engine import run_simulation
from psychometrics_lab.simulation.history import RunHistory
from psychometrics_lab.simulation.presets import get_preset
from psychometrics_lab.simulation.reliability import noise_magnitude


@pytest.mark.parametrize("seed", range(25))
def test_classroom_scenario_ranges(seed: int) -> None:
    """K=10, N=200, r=0.4, q=0.7."""
    params = SimulationParameters(
        sample_size=200, item_cohesion=0.4, construct_quality=0.7
    )
    result = run_simulation(generic_items(10), params, get_rng(seed))

    assert 0.75 <= result.reliability.cronbach_alpha <= 0.95
    assert 0.85 <= result.fit.cfi <= 0.99
    assert 0.03 <= result.fit.rmsea <= 0.12
    groups = result.group_comparison
    assert groups.clinical_group_mean > groups.control_group_mean


def test_baseline_preset_replays() -> None:
    preset = get_preset("baseline")
    items = generic_items(preset.n_items)
    a = run_simulation(items, preset.parameters, get_rng(preset.random_seed))
    b = run_simulation(items, preset.parameters, get_rng(preset.random_seed))
    assert a == b


def test_small_samples_give_less_stable_alpha() -> None:
    assert noise_magnitude(30) == pytest.approx(0.091, abs=1e-3)
    assert noise_magnitude(1000) == pytest.approx(0.016, abs=1e-3)

    rng = get_rng(2024)
    items = generic_items(10)
    alphas: dict[int, list[float]] = {}
    for n in (30, 1000):
        history = RunHistory()
        params = SimulationParameters(sample_size=n)
        for _ in range(200):
            history.append(run_simulation(items, params, rng))
        alphas[n] = [run.cronbach_alpha for run in history]

    small_var = float(np.var(alphas[30]))
    large_var = float(np.var(alphas[1000]))
    # Noise half-width ratio is sqrt(1000 / 30) ~ 5.8, so variance ~ 33x
    assert small_var > 5 * large_var


def test_mean_score_norms_on_sten_and_tscore() -> None:
    result = run_simulation(
        generic_items(10), SimulationParameters(), get_rng(42)
    )
    mean = result.reliability.mean_score

    sten = transform_result_score(mean, result, ScaleType.STEN)
    tscore = transform_result_score(mean, result, ScaleType.TSCORE)

    assert (sten.final_score, sten.band) == (6, ScoreBand.AVERAGE)
    assert (tscore.final_score, tscore.band) == (50, ScoreBand.AVERAGE)


def test_weak_construct_reads_worse_than_baseline() -> None:
    weak = get_preset("weak_construct")
    base = get_preset("baseline")
    weak_result = run_simulation(
        generic_items(weak.n_items), weak.parameters, get_rng(0)
    )
    base_result = run_simulation(
        generic_items(base.n_items), base.parameters, get_rng(0)
    )

    assert (
        weak_result.reliability.cronbach_alpha
        < base_result.reliability.cronbach_alpha
    )
    assert weak_result.fit.cfi < base_result.fit.cfi
    assert weak_result.fit.rmsea > base_result.fit.rmsea
    assert (
        weak_result.validity.discriminant_validity
        > base_result.validity.discriminant_validity
    )
