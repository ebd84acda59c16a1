"""
Configuration dataclasses for simulation runs.

This module defines:
- SimulationParameters: the three slider values of one run
- PresetConfig: a named, reproducible simulation scenario loaded from YAML
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from psychometrics_lab.core.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

# Recommended sample size range. Values outside it are accepted but logged.
RECOMMENDED_MIN_SAMPLE_SIZE = 30
RECOMMENDED_MAX_SAMPLE_SIZE = 1000

# Hard bounds on the intended average inter-item correlation
ITEM_COHESION_BOUNDS = (0.1, 0.8)

# Hard bounds on the theoretical strength of the construct
CONSTRUCT_QUALITY_BOUNDS = (0.1, 0.95)

DEFAULT_SAMPLE_SIZE = 200
DEFAULT_ITEM_COHESION = 0.4
DEFAULT_CONSTRUCT_QUALITY = 0.7


def _check_unit_range(
    name: str, value: float, bounds: tuple[float, float]
) -> None:
    lower, upper = bounds
    if not math.isfinite(value) or not (lower <= value <= upper):
        raise InvalidInputError(
            f"{name} must be in [{lower}, {upper}], got {value}"
        )


@dataclass(frozen=True)
class SimulationParameters:
    """Inputs of a single simulation run.

    Attributes:
        sample_size: Number of simulated respondents (N).
        item_cohesion: Intended average inter-item correlation.
        construct_quality: Theoretical strength of the underlying trait.
    """

    sample_size: int = DEFAULT_SAMPLE_SIZE
    item_cohesion: float = DEFAULT_ITEM_COHESION
    construct_quality: float = DEFAULT_CONSTRUCT_QUALITY

    def __post_init__(self) -> None:
        if isinstance(self.sample_size, bool) or not isinstance(
            self.sample_size, int
        ):
            raise InvalidInputError(
                f"sample_size must be an integer, got {self.sample_size!r}"
            )
        if self.sample_size < 1:
            raise InvalidInputError(
                f"sample_size must be >= 1, got {self.sample_size}"
            )
        if not (
            RECOMMENDED_MIN_SAMPLE_SIZE
            <= self.sample_size
            <= RECOMMENDED_MAX_SAMPLE_SIZE
        ):
            logger.warning(
                "sample_size=%d is outside the recommended range [%d, %d]",
                self.sample_size,
                RECOMMENDED_MIN_SAMPLE_SIZE,
                RECOMMENDED_MAX_SAMPLE_SIZE,
            )
        _check_unit_range(
            "item_cohesion", self.item_cohesion, ITEM_COHESION_BOUNDS
        )
        _check_unit_range(
            "construct_quality",
            self.construct_quality,
            CONSTRUCT_QUALITY_BOUNDS,
        )


@dataclass
class PresetConfig:
    """A reproducible simulation scenario.

    The slider values are stored flat so the YAML files stay one level
    deep; ``parameters`` assembles (and validates) them.

    Attributes:
        description: One-line explanation of what the preset demonstrates.
        n_items: Number of generic items to simulate with when the caller
            has no item pool of its own.
        sample_size: Number of simulated respondents (N).
        item_cohesion: Intended average inter-item correlation.
        construct_quality: Theoretical strength of the underlying trait.
        random_seed: Seed for the injected generator; None means entropy.
    """

    description: str = ""
    n_items: int = 10
    sample_size: int = DEFAULT_SAMPLE_SIZE
    item_cohesion: float = DEFAULT_ITEM_COHESION
    construct_quality: float = DEFAULT_CONSTRUCT_QUALITY
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.n_items < 1:
            raise InvalidInputError("A preset needs at least 1 item")
        # Fail at load time rather than at the first run
        _ = self.parameters

    @property
    def parameters(self) -> SimulationParameters:
        return SimulationParameters(
            sample_size=self.sample_size,
            item_cohesion=self.item_cohesion,
            construct_quality=self.construct_quality,
        )
