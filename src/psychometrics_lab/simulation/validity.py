"""
Validity engine.

Each index is a weighted blend of the effective inter-item correlation and
the construct quality, plus one uniform noise draw, clamped to a plausible
range. Convergent validity follows construct quality; discriminant validity
follows its complement, because a poorly specified construct leaks into
unrelated variance.
"""

from dataclasses import dataclass

from numpy.random import Generator

from psychometrics_lab.core.utils import clamp
from psychometrics_lab.simulation.data_models import ValidityIndices

VARIANCE_EXPLAINED_BOUNDS = (20.0, 85.0)
CONVERGENT_BOUNDS = (0.1, 0.92)
DISCRIMINANT_BOUNDS = (0.05, 0.8)
CRITERION_BOUNDS = (0.1, 0.85)


@dataclass(frozen=True)
class ValidityNoise:
    """The uniform draws used by one validity computation."""

    variance: float
    convergent: float
    discriminant: float
    criterion: float

    @classmethod
    def draw(cls, rng: Generator) -> "ValidityNoise":
        return cls(
            variance=float(rng.uniform(0.0, 5.0)),
            convergent=float(rng.uniform(0.0, 0.1)),
            discriminant=float(rng.uniform(0.0, 0.25)),
            criterion=float(rng.uniform(0.0, 0.15)),
        )

    @classmethod
    def zero(cls) -> "ValidityNoise":
        return cls(
            variance=0.0, convergent=0.0, discriminant=0.0, criterion=0.0
        )


def compute_validity(
    effective_correlation: float,
    construct_quality: float,
    noise: ValidityNoise,
) -> ValidityIndices:
    """Deterministic part of the validity engine, with noise supplied."""
    r = effective_correlation
    q = construct_quality
    return ValidityIndices(
        variance_explained=clamp(
            60 * r + 25 * q + noise.variance, *VARIANCE_EXPLAINED_BOUNDS
        ),
        convergent_validity=clamp(
            0.65 * q + 0.25 * r + noise.convergent, *CONVERGENT_BOUNDS
        ),
        discriminant_validity=clamp(
            0.6 * (1 - q) + noise.discriminant, *DISCRIMINANT_BOUNDS
        ),
        criterion_validity=clamp(
            0.5 * q + 0.3 * r + noise.criterion, *CRITERION_BOUNDS
        ),
    )


def simulate_validity(
    effective_correlation: float,
    construct_quality: float,
    rng: Generator,
) -> ValidityIndices:
    return compute_validity(
        effective_correlation, construct_quality, ValidityNoise.draw(rng)
    )
