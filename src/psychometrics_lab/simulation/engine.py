"""
Orchestration layer for a simulation run.

This module ties together the reliability, validity, fit, group-separation
and calibration engines into a single immutable SimulationResult.
"""

import logging
from collections.abc import Sequence

import pandas as pd
from numpy.random import Generator

from psychometrics_lab.core.data_models import TestItem
from psychometrics_lab.core.exceptions import InvalidInputError
from psychometrics_lab.core.utils import get_rng
from psychometrics_lab.simulation.calibration import (
    calibrate_items,
    compute_test_information,
)
from psychometrics_lab.simulation.config import SimulationParameters
from psychometrics_lab.simulation.data_models import SimulationResult
from psychometrics_lab.simulation.groups import simulate_group_comparison
from psychometrics_lab.simulation.model_fit import simulate_fit
from psychometrics_lab.simulation.reliability import simulate_reliability
from psychometrics_lab.simulation.validity import simulate_validity

logger = logging.getLogger(__name__)


def run_simulation(
    items: Sequence[TestItem],
    parameters: SimulationParameters,
    rng: Generator | None = None,
) -> SimulationResult:
    """
    Simulate a data collection and analysis for the given item set.

    This is the main entry point for the engines. It runs, in order:
        1. Reliability (effective correlation, alpha, SEM, CI)
        2. Validity indices
        3. Model fit indices
        4. Clinical vs. control group comparison
        5. Item calibration and test information

    Every random draw comes from ``rng``, so a seeded generator replays the
    run exactly.

    Args:
        items: Current item set (at least 1 item).
        parameters: Slider values, snapshotted for the whole run.
        rng: Random number generator. Defaults to an unseeded one.

    Returns:
        A new, immutable SimulationResult.

    Raises:
        InvalidInputError: If the item set is empty.
    """
    if len(items) == 0:
        raise InvalidInputError("A simulation needs at least 1 item")

    if rng is None:
        rng = get_rng()

    # Snapshot so later pool edits cannot leak into this run
    snapshot = tuple(items)
    n = parameters.sample_size
    q = parameters.construct_quality

    # Step 1: Reliability
    reliability = simulate_reliability(
        n_items=len(snapshot),
        item_cohesion=parameters.item_cohesion,
        sample_size=n,
        rng=rng,
    )
    r_eff = reliability.effective_correlation

    # Step 2: Validity
    validity = simulate_validity(r_eff, q, rng)

    # Step 3: Model fit
    fit = simulate_fit(q, r_eff, rng)

    # Step 4: Group separation
    group_comparison = simulate_group_comparison(reliability, q, n, rng)

    # Step 5: Calibration and test information
    calibrated = calibrate_items(snapshot, r_eff, rng)
    test_information = compute_test_information(calibrated)

    logger.info(
        "Simulation finished: K=%d N=%d alpha=%.3f CFI=%.3f RMSEA=%.3f",
        len(snapshot),
        n,
        reliability.cronbach_alpha,
        fit.cfi,
        fit.rmsea,
    )

    return SimulationResult(
        parameters=parameters,
        sample_size=n,
        reliability=reliability,
        validity=validity,
        fit=fit,
        group_comparison=group_comparison,
        test_information=test_information,
        items=calibrated,
    )


def distribution_to_dataframe(result: SimulationResult) -> pd.DataFrame:
    """
    Convert the group distribution records to a pandas DataFrame.

    Returns:
        DataFrame with columns: score, control_density, clinical_density,
        control_freq, clinical_freq.
    """
    return pd.DataFrame(
        [p.model_dump() for p in result.group_comparison.distribution]
    )


def information_to_dataframe(result: SimulationResult) -> pd.DataFrame:
    """DataFrame with columns: theta, info, sem."""
    return pd.DataFrame([p.model_dump() for p in result.test_information])
