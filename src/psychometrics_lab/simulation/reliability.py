"""
Reliability engine.

Derives classical-test-theory internal consistency indices from the number
of items and an effective inter-item correlation:

    alpha = K * r / (1 + (K - 1) * r)      (standardized Cronbach's alpha)
    SEM   = SD * sqrt(1 - alpha)
    CI95  = 1.96 * SEM

The effective correlation is the slider value perturbed by noise whose
magnitude shrinks with sqrt(N), so small samples give unstable estimates.
"""

import logging
import math

from numpy.random import Generator

from psychometrics_lab.core.exceptions import InvalidInputError
from psychometrics_lab.core.utils import clamp
from psychometrics_lab.simulation.data_models import ReliabilityIndices

logger = logging.getLogger(__name__)

# Half-width of the correlation noise is NOISE_SCALE / sqrt(N)
NOISE_SCALE = 0.5
EFFECTIVE_CORRELATION_BOUNDS = (0.05, 0.95)

SPLIT_HALF_JITTER = 0.04
SPLIT_HALF_BOUNDS = (0.01, 0.99)

# Likert items are scored 1..5
POINTS_PER_ITEM = 5
MEAN_BASE_PROPORTION = 0.55
MEAN_JITTER_PROPORTION = 0.1
SD_PROPORTION = 0.15

Z_95 = 1.96


def noise_magnitude(sample_size: int) -> float:
    """Half-width of the uniform noise added to the item cohesion."""
    if sample_size < 1:
        raise InvalidInputError(
            f"sample_size must be >= 1, got {sample_size}"
        )
    return NOISE_SCALE / math.sqrt(sample_size)


def effective_correlation(
    item_cohesion: float, sample_size: int, rng: Generator
) -> float:
    """Perturb the intended inter-item correlation with sampling noise."""
    magnitude = noise_magnitude(sample_size)
    noise = rng.uniform(-magnitude, magnitude)
    return clamp(item_cohesion + noise, *EFFECTIVE_CORRELATION_BOUNDS)


def cronbach_alpha(n_items: int, mean_correlation: float) -> float:
    """
    Standardized Cronbach's alpha.

    Args:
        n_items: Number of items (K), at least 1.
        mean_correlation: Average inter-item correlation in [0, 1].

    Returns:
        Alpha in [0, 1]. Strictly increasing in both arguments.

    Raises:
        InvalidInputError: If K < 1 or the correlation is outside [0, 1].
    """
    if n_items < 1:
        raise InvalidInputError(
            f"Reliability needs at least 1 item, got {n_items}"
        )
    if not (0.0 <= mean_correlation <= 1.0):
        raise InvalidInputError(
            f"mean_correlation must be in [0, 1], got {mean_correlation}"
        )
    # Denominator is >= 1 for K >= 1 and r >= 0
    return (n_items * mean_correlation) / (
        1 + (n_items - 1) * mean_correlation
    )


def standard_error_of_measurement(
    standard_deviation: float, reliability: float
) -> float:
    """SEM = SD * sqrt(1 - reliability). Zero for perfect reliability."""
    if standard_deviation <= 0:
        raise InvalidInputError(
            f"standard_deviation must be > 0, got {standard_deviation}"
        )
    if not (0.0 <= reliability <= 1.0):
        raise InvalidInputError(
            f"reliability must be in [0, 1], got {reliability}"
        )
    return standard_deviation * math.sqrt(1.0 - reliability)


def max_raw_score(n_items: int) -> float:
    return float(POINTS_PER_ITEM * n_items)


def simulate_reliability(
    n_items: int,
    item_cohesion: float,
    sample_size: int,
    rng: Generator,
) -> ReliabilityIndices:
    """
    Run the reliability engine.

    Args:
        n_items: Number of items in the pool (K).
        item_cohesion: Intended average inter-item correlation.
        sample_size: Number of simulated respondents (N).
        rng: Random number generator.

    Returns:
        ReliabilityIndices including the effective correlation, which the
        validity, fit and calibration engines build on.

    Raises:
        InvalidInputError: If there are no items.
    """
    if n_items < 1:
        raise InvalidInputError(
            f"Reliability needs at least 1 item, got {n_items}"
        )

    r_eff = effective_correlation(item_cohesion, sample_size, rng)
    alpha = cronbach_alpha(n_items, r_eff)
    split_half = clamp(
        alpha + rng.uniform(-SPLIT_HALF_JITTER, SPLIT_HALF_JITTER),
        *SPLIT_HALF_BOUNDS,
    )

    max_score = max_raw_score(n_items)
    mean_score = max_score * (
        MEAN_BASE_PROPORTION + rng.uniform(0.0, MEAN_JITTER_PROPORTION)
    )
    sd = SD_PROPORTION * max_score

    sem = standard_error_of_measurement(sd, alpha)
    ci = Z_95 * sem

    logger.debug(
        "Reliability: K=%d r_eff=%.3f alpha=%.3f sem=%.3f",
        n_items,
        r_eff,
        alpha,
        sem,
    )

    return ReliabilityIndices(
        n_items=n_items,
        effective_correlation=r_eff,
        cronbach_alpha=alpha,
        split_half_reliability=split_half,
        max_score=max_score,
        mean_score=mean_score,
        standard_deviation=sd,
        sem=sem,
        confidence_interval=ci,
    )
