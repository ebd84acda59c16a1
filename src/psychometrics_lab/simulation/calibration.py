"""
Item calibration and test information engine.

Each item gets a simulated difficulty (endorsement probability) and
discrimination. The test information function is then computed under the
two-parameter logistic model with the usual scaling constant D = 1.7:

    b    = -ln(p / (1 - p))
    P(θ) = 1 / (1 + exp(-D * a * (θ - b)))
    I(θ) = Σ a^2 * P(θ) * (1 - P(θ))
    SEM(θ) = 1 / sqrt(I(θ))
"""

import logging
from collections.abc import Sequence

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray

from psychometrics_lab.core.data_models import TestItem
from psychometrics_lab.core.exceptions import InvalidInputError
from psychometrics_lab.core.utils import clamp
from psychometrics_lab.simulation.data_models import InformationPoint

logger = logging.getLogger(__name__)

DIFFICULTY_BOUNDS = (0.3, 0.8)
DISCRIMINATION_PER_CORRELATION = 2.0
DISCRIMINATION_JITTER = 0.25
DISCRIMINATION_BOUNDS = (0.2, 2.5)

LOGISTIC_SCALE = 1.7

THETA_MIN = -3.0
THETA_MAX = 3.0
THETA_STEP = 0.2


def theta_grid() -> NDArray[np.float64]:
    """Latent trait grid from -3 to 3 in steps of 0.2 (31 points)."""
    n_points = int(round((THETA_MAX - THETA_MIN) / THETA_STEP)) + 1
    # Rounded so the grid holds exactly -3.0, -2.8, ..., 3.0
    grid: NDArray[np.float64] = np.round(
        THETA_MIN + THETA_STEP * np.arange(n_points, dtype=np.float64), 1
    )
    return grid


def calibrate_items(
    items: Sequence[TestItem],
    effective_correlation: float,
    rng: Generator,
) -> tuple[TestItem, ...]:
    """
    Assign simulated difficulty and discrimination to every item.

    Args:
        items: Current item set.
        effective_correlation: r_eff from the reliability engine.
        rng: Random number generator.

    Returns:
        New TestItem copies with both parameters set; ids and order kept.

    Raises:
        InvalidInputError: If there are no items.
    """
    if len(items) == 0:
        raise InvalidInputError("Calibration needs at least 1 item")

    calibrated = []
    for item in items:
        difficulty = float(rng.uniform(*DIFFICULTY_BOUNDS))
        discrimination = clamp(
            DISCRIMINATION_PER_CORRELATION * effective_correlation
            + rng.uniform(-DISCRIMINATION_JITTER, DISCRIMINATION_JITTER),
            *DISCRIMINATION_BOUNDS,
        )
        calibrated.append(
            item.model_copy(
                update={
                    "difficulty": difficulty,
                    "discrimination": discrimination,
                }
            )
        )
    return tuple(calibrated)


def difficulty_to_threshold(
    difficulty: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Express an endorsement probability as a logit threshold b."""
    result: NDArray[np.float64] = -np.log(difficulty / (1.0 - difficulty))
    return result


def item_information(
    theta: NDArray[np.float64],
    discrimination: NDArray[np.float64],
    difficulty: NDArray[np.float64],
) -> NDArray[np.float64]:
    """
    Item information for every (theta, item) pair.

    Args:
        theta: Array of shape (n_theta,).
        discrimination: Array of shape (n_items,), all > 0.
        difficulty: Array of shape (n_items,), all in (0, 1).

    Returns:
        Array of shape (n_theta, n_items).
    """
    b = difficulty_to_threshold(difficulty)
    a = discrimination
    exponent = -LOGISTIC_SCALE * a[np.newaxis, :] * (
        theta[:, np.newaxis] - b[np.newaxis, :]
    )
    exponent = np.clip(exponent, -30, 30)
    p = 1.0 / (1.0 + np.exp(exponent))
    info: NDArray[np.float64] = (a**2)[np.newaxis, :] * p * (1.0 - p)
    return info


def compute_test_information(
    items: Sequence[TestItem],
) -> tuple[InformationPoint, ...]:
    """
    Test information function over the latent trait grid.

    Args:
        items: Calibrated items.

    Returns:
        One InformationPoint per grid value, in ascending theta order.

    Raises:
        InvalidInputError: If there are no items, an item is not calibrated
            or has parameters outside the model's domain, or the total
            information is not strictly positive somewhere on the grid.
    """
    if len(items) == 0:
        raise InvalidInputError("Test information needs at least 1 item")

    for item in items:
        if item.difficulty is None or item.discrimination is None:
            raise InvalidInputError(f"Item {item.id} is not calibrated")
        if not (0.0 < item.difficulty < 1.0):
            raise InvalidInputError(
                f"Item {item.id} difficulty must be in (0, 1), "
                f"got {item.difficulty}"
            )

    difficulty = np.array(
        [item.difficulty for item in items], dtype=np.float64
    )
    discrimination = np.array(
        [item.discrimination for item in items], dtype=np.float64
    )

    thetas = theta_grid()
    total = item_information(thetas, discrimination, difficulty).sum(axis=1)

    if not np.all(np.isfinite(total)) or np.any(total <= 0):
        raise InvalidInputError(
            "Test information must be strictly positive across the grid"
        )

    sem = 1.0 / np.sqrt(total)
    logger.debug(
        "Test information: %d items, peak %.3f at theta=%.1f",
        len(items),
        float(total.max()),
        float(thetas[int(np.argmax(total))]),
    )

    return tuple(
        InformationPoint(
            theta=float(thetas[i]), info=float(total[i]), sem=float(sem[i])
        )
        for i in range(len(thetas))
    )
