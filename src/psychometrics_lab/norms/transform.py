"""
Norm transformation.

Converts a raw questionnaire score into a standardized scale score via a
z-score:

    z      = (raw - population_mean) / population_sd
    scaled = scale_mean + z * scale_sd
    final  = round(clamp(scaled, scale_min, scale_max))

and attaches a 95% confidence band in raw-score units. Nothing here is
random, so switching scales for the same raw score is fully repeatable.
"""

import math
from enum import StrEnum

import numpy as np
from pydantic import BaseModel, ConfigDict
from scipy import stats

from psychometrics_lab.core.exceptions import InvalidInputError
from psychometrics_lab.core.utils import clamp, round_half_up
from psychometrics_lab.norms.scales import (
    NormScaleConfig,
    ScaleType,
    get_scale,
)
from psychometrics_lab.simulation.data_models import SimulationResult

# Chart domain extends this many SDs beyond the outermost group mean
DISPLAY_RANGE_SDS = 3.5
CURVE_POINTS = 81
BOUNDARY_Z_POINTS = (-2, -1, 0, 1, 2)

_RECORD_CONFIG = ConfigDict(frozen=True, allow_inf_nan=False)


class ScoreBand(StrEnum):
    LOW = "Low"
    AVERAGE = "Average"
    HIGH = "High"


class DisplayRange(BaseModel):
    model_config = _RECORD_CONFIG

    lower: float
    upper: float


class NormScore(BaseModel):
    """A raw score expressed on one norm scale."""

    model_config = _RECORD_CONFIG

    scale_type: ScaleType
    raw_score: float
    z_score: float
    scaled_raw: float
    final_score: int
    band: ScoreBand
    ci_lower: float
    ci_upper: float
    percentile: float


class NormCurvePoint(BaseModel):
    model_config = _RECORD_CONFIG

    x: float
    y_general: float
    y_clinical: float


class ScaleBoundary(BaseModel):
    """A z-score marker with its raw and scaled equivalents."""

    model_config = _RECORD_CONFIG

    z: int
    raw_score: float
    scaled_score: float


def classify_score(score: int, scale: NormScaleConfig) -> ScoreBand:
    if score <= scale.low_threshold:
        return ScoreBand.LOW
    if score >= scale.high_threshold:
        return ScoreBand.HIGH
    return ScoreBand.AVERAGE


def display_range(
    population_mean: float, clinical_mean: float, population_sd: float
) -> DisplayRange:
    """Score range shown on the norm chart, wide enough for both groups."""
    return DisplayRange(
        lower=min(population_mean, clinical_mean)
        - DISPLAY_RANGE_SDS * population_sd,
        upper=max(population_mean, clinical_mean)
        + DISPLAY_RANGE_SDS * population_sd,
    )


def transform_score(
    raw_score: float,
    population_mean: float,
    population_sd: float,
    confidence_interval: float,
    scale: NormScaleConfig | ScaleType | str,
    score_range: DisplayRange | None = None,
) -> NormScore:
    """
    Express a raw score on a norm scale.

    Args:
        raw_score: Observed questionnaire score.
        population_mean: Mean raw score of the norm sample.
        population_sd: Standard deviation of the norm sample (> 0).
        confidence_interval: Half-width of the 95% band (1.96 * SEM).
        scale: Target scale, as a config or its identifier.
        score_range: Displayed raw-score range the band is clamped to.
            Defaults to population_mean +/- 3.5 SD.

    Returns:
        NormScore with the clamped, rounded scale score and its band.

    Raises:
        InvalidInputError: If the SD is not positive or any input is not
            finite.
    """
    for name, value in (
        ("raw_score", raw_score),
        ("population_mean", population_mean),
        ("population_sd", population_sd),
        ("confidence_interval", confidence_interval),
    ):
        if not math.isfinite(value):
            raise InvalidInputError(f"{name} must be finite, got {value}")
    if population_sd <= 0:
        raise InvalidInputError(
            f"population_sd must be > 0, got {population_sd}"
        )
    if confidence_interval < 0:
        raise InvalidInputError(
            f"confidence_interval must be >= 0, got {confidence_interval}"
        )

    if not isinstance(scale, NormScaleConfig):
        scale = get_scale(scale)
    if score_range is None:
        score_range = display_range(
            population_mean, population_mean, population_sd
        )

    z = (raw_score - population_mean) / population_sd
    scaled_raw = scale.mean + z * scale.sd
    final_score = round_half_up(clamp(scaled_raw, scale.min, scale.max))

    return NormScore(
        scale_type=scale.scale_type,
        raw_score=raw_score,
        z_score=z,
        scaled_raw=scaled_raw,
        final_score=final_score,
        band=classify_score(final_score, scale),
        ci_lower=clamp(
            raw_score - confidence_interval,
            score_range.lower,
            score_range.upper,
        ),
        ci_upper=clamp(
            raw_score + confidence_interval,
            score_range.lower,
            score_range.upper,
        ),
        percentile=float(100.0 * stats.norm.cdf(z)),
    )


def transform_result_score(
    raw_score: float,
    result: SimulationResult,
    scale: NormScaleConfig | ScaleType | str,
) -> NormScore:
    """Norm a raw score against the norm sample of a simulation run."""
    reliability = result.reliability
    return transform_score(
        raw_score=raw_score,
        population_mean=reliability.mean_score,
        population_sd=reliability.standard_deviation,
        confidence_interval=reliability.confidence_interval,
        scale=scale,
        score_range=result_display_range(result),
    )


def result_display_range(result: SimulationResult) -> DisplayRange:
    return display_range(
        result.reliability.mean_score,
        result.group_comparison.clinical_group_mean,
        result.reliability.standard_deviation,
    )


def population_curves(
    result: SimulationResult,
) -> tuple[NormCurvePoint, ...]:
    """Bell curves of the general population and the clinical group."""
    mean = result.reliability.mean_score
    sd = result.reliability.standard_deviation
    clinical_mean = result.group_comparison.clinical_group_mean
    score_range = result_display_range(result)

    xs = np.linspace(score_range.lower, score_range.upper, CURVE_POINTS)
    general = stats.norm.pdf(xs, loc=mean, scale=sd)
    clinical = stats.norm.pdf(xs, loc=clinical_mean, scale=sd)
    return tuple(
        NormCurvePoint(
            x=float(xs[i]),
            y_general=float(general[i]),
            y_clinical=float(clinical[i]),
        )
        for i in range(CURVE_POINTS)
    )


def scale_boundaries(
    result: SimulationResult,
    scale: NormScaleConfig | ScaleType | str,
) -> tuple[ScaleBoundary, ...]:
    """Raw and scaled positions of the -2..+2 SD markers."""
    if not isinstance(scale, NormScaleConfig):
        scale = get_scale(scale)
    mean = result.reliability.mean_score
    sd = result.reliability.standard_deviation
    return tuple(
        ScaleBoundary(
            z=z,
            raw_score=mean + z * sd,
            scaled_score=scale.mean + z * scale.sd,
        )
        for z in BOUNDARY_Z_POINTS
    )
