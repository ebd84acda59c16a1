"""
Model-fit engine.

Structural fit indices from a confirmatory factor analysis are imitated by
a composite fit score

    fit = 0.7 * q + 0.3 * r_eff        (in [0, 1])

CFI rises and RMSEA falls as the composite improves; SRMR is derived from
RMSEA rather than drawn separately.
"""

from dataclasses import dataclass

from numpy.random import Generator

from psychometrics_lab.core.utils import clamp
from psychometrics_lab.simulation.data_models import FitIndices

CFI_BOUNDS = (0.60, 0.99)
RMSEA_BOUNDS = (0.01, 0.20)
SRMR_RATIO = 0.8

CFI_JITTER = 0.01
RMSEA_JITTER = 0.005

# Conventional cut-offs
GOOD_CFI = 0.90
GOOD_RMSEA = 0.08


@dataclass(frozen=True)
class FitNoise:
    cfi: float
    rmsea: float

    @classmethod
    def draw(cls, rng: Generator) -> "FitNoise":
        return cls(
            cfi=float(rng.uniform(-CFI_JITTER, CFI_JITTER)),
            rmsea=float(rng.uniform(-RMSEA_JITTER, RMSEA_JITTER)),
        )

    @classmethod
    def zero(cls) -> "FitNoise":
        return cls(cfi=0.0, rmsea=0.0)


def composite_fit(
    construct_quality: float, effective_correlation: float
) -> float:
    return 0.7 * construct_quality + 0.3 * effective_correlation


def compute_fit_indices(fit: float, noise: FitNoise) -> FitIndices:
    """Map a composite fit score to CFI, RMSEA and SRMR."""
    cfi = clamp(0.85 + 0.14 * fit + noise.cfi, *CFI_BOUNDS)
    rmsea = clamp(0.15 - 0.12 * fit + noise.rmsea, *RMSEA_BOUNDS)
    return FitIndices(cfi=cfi, rmsea=rmsea, srmr=SRMR_RATIO * rmsea)


def simulate_fit(
    construct_quality: float,
    effective_correlation: float,
    rng: Generator,
) -> FitIndices:
    fit = composite_fit(construct_quality, effective_correlation)
    return compute_fit_indices(fit, FitNoise.draw(rng))
