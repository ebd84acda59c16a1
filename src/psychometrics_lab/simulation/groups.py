"""
Group-separation engine.

Simulates a control group and a clinical group whose means drift apart as
construct quality grows, and reports Cohen's d, an approximate Mann-Whitney
U statistic and an approximate p-value.

The p-value uses the closed form exp(-0.717 z - 0.416 z^2), a rough
normal-tail approximation kept for behavioural compatibility. It is not an
exact normal CDF and should not be read as an authoritative test result.
"""

import logging
import math

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray
from scipy import stats

from psychometrics_lab.core.exceptions import InvalidInputError
from psychometrics_lab.core.utils import round_half_up
from psychometrics_lab.simulation.data_models import (
    DistributionPoint,
    GroupComparison,
    ReliabilityIndices,
)

logger = logging.getLogger(__name__)

SEPARATION_PER_QUALITY = 2.5
CONTROL_MEAN_PROPORTION = 0.4
CLINICAL_SHIFT_PER_SEPARATION = 0.15
POOLED_SD_INFLATION = 1.1

P_VALUE_FLOOR = 0.001
P_VALUE_CEILING = 1.0

# Histogram grid: [0.1, 0.9] of the maximum score in steps of max / 50
GRID_LOWER_PROPORTION = 0.1
GRID_UPPER_PROPORTION = 0.9
GRID_STEPS_PER_MAX = 50
FREQ_SCALE = 10
FREQ_JITTER_BOUNDS = (0.8, 1.2)


def approximate_p_value(z: float) -> float:
    """Closed-form approximation of a normal tail probability.

    Clipped to [0.001, 1]. See the module docstring for caveats.
    """
    p = math.exp(-0.717 * z - 0.416 * z * z)
    return float(np.clip(p, P_VALUE_FLOOR, P_VALUE_CEILING))


def approximate_mann_whitney_u(z: float, sample_size: int) -> int:
    """U = N^2/4 - z * sqrt(N^2 (2N + 1) / 12), reported as round(|U|)."""
    n = sample_size
    u = (n * n) / 4 - z * math.sqrt((n * n * (2 * n + 1)) / 12)
    return round_half_up(abs(u))


def score_grid(max_score: float) -> NDArray[np.float64]:
    """Raw-score grid for the distribution chart, ascending, no gaps."""
    span = GRID_UPPER_PROPORTION - GRID_LOWER_PROPORTION
    n_points = round(span * GRID_STEPS_PER_MAX) + 1
    return np.linspace(
        GRID_LOWER_PROPORTION * max_score,
        GRID_UPPER_PROPORTION * max_score,
        n_points,
        dtype=np.float64,
    )


def build_distribution(
    control_mean: float,
    clinical_mean: float,
    pooled_sd: float,
    max_score: float,
    sample_size: int,
    rng: Generator,
) -> tuple[DistributionPoint, ...]:
    """
    Paired density and pseudo-histogram records for both groups.

    Frequencies are density * N * step * 10, each multiplied by its own
    uniform jitter in [0.8, 1.2] so the bars look like real data.
    """
    grid = score_grid(max_score)
    step = max_score / GRID_STEPS_PER_MAX

    control_density = stats.norm.pdf(grid, loc=control_mean, scale=pooled_sd)
    clinical_density = stats.norm.pdf(grid, loc=clinical_mean, scale=pooled_sd)

    jitter = rng.uniform(*FREQ_JITTER_BOUNDS, size=(len(grid), 2))
    scale = sample_size * step * FREQ_SCALE
    control_freq = control_density * scale * jitter[:, 0]
    clinical_freq = clinical_density * scale * jitter[:, 1]

    return tuple(
        DistributionPoint(
            score=float(grid[i]),
            control_density=float(control_density[i]),
            clinical_density=float(clinical_density[i]),
            control_freq=round_half_up(float(control_freq[i])),
            clinical_freq=round_half_up(float(clinical_freq[i])),
        )
        for i in range(len(grid))
    )


def simulate_group_comparison(
    reliability: ReliabilityIndices,
    construct_quality: float,
    sample_size: int,
    rng: Generator,
) -> GroupComparison:
    """
    Run the group-separation engine.

    Args:
        reliability: Output of the reliability engine (max score and SD).
        construct_quality: Theoretical strength of the construct (q).
        sample_size: Number of simulated respondents (N).
        rng: Random number generator (histogram jitter only).

    Returns:
        GroupComparison with the distribution records.
    """
    if sample_size < 1:
        raise InvalidInputError(
            f"sample_size must be >= 1, got {sample_size}"
        )

    max_score = reliability.max_score
    separation = SEPARATION_PER_QUALITY * construct_quality
    control_mean = CONTROL_MEAN_PROPORTION * max_score
    clinical_mean = max_score * (
        CONTROL_MEAN_PROPORTION + CLINICAL_SHIFT_PER_SEPARATION * separation
    )
    pooled_sd = POOLED_SD_INFLATION * reliability.standard_deviation

    effect_size = (clinical_mean - control_mean) / pooled_sd
    z = effect_size * math.sqrt(sample_size / 2)

    logger.debug(
        "Groups: control=%.2f clinical=%.2f d=%.3f z=%.3f",
        control_mean,
        clinical_mean,
        effect_size,
        z,
    )

    return GroupComparison(
        control_group_mean=control_mean,
        clinical_group_mean=clinical_mean,
        pooled_sd=pooled_sd,
        effect_size=effect_size,
        z_score=z,
        u_value=approximate_mann_whitney_u(z, sample_size),
        p_value=approximate_p_value(z),
        distribution=build_distribution(
            control_mean=control_mean,
            clinical_mean=clinical_mean,
            pooled_sd=pooled_sd,
            max_score=max_score,
            sample_size=sample_size,
            rng=rng,
        ),
    )
