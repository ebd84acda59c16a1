"""
Standardized norm scales.

The four definitions below are fixed reference data and must not change:
displayed norms are compared against other implementations value by value.
"""

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

from psychometrics_lab.core.exceptions import InvalidInputError


class ScaleType(StrEnum):
    STEN = "sten"
    STANINE = "stanine"
    TSCORE = "tscore"
    TETRON = "tetron"


@dataclass(frozen=True)
class NormScaleConfig:
    """
    Definition of one norm scale.

    Attributes:
        scale_type: Identifier of the scale.
        name: Display name.
        mean: Mean of the standardized scale.
        sd: Standard deviation of the standardized scale.
        min: Lowest reportable score.
        max: Highest reportable score.
        low_threshold: Scores at or below this are "Low".
        high_threshold: Scores at or above this are "High".
    """

    scale_type: ScaleType
    name: str
    mean: float
    sd: float
    min: int
    max: int
    low_threshold: int
    high_threshold: int

    def __post_init__(self) -> None:
        if self.sd <= 0:
            raise ValueError(f"sd must be > 0, got {self.sd}")
        if not (
            self.min
            <= self.low_threshold
            < self.high_threshold
            <= self.max
        ):
            raise ValueError(
                f"Thresholds of {self.name} must satisfy "
                "min <= low < high <= max"
            )


NORM_SCALES: MappingProxyType[ScaleType, NormScaleConfig] = MappingProxyType(
    {
        ScaleType.STEN: NormScaleConfig(
            scale_type=ScaleType.STEN,
            name="Sten (standard ten)",
            mean=5.5,
            sd=2,
            min=1,
            max=10,
            low_threshold=3,
            high_threshold=8,
        ),
        ScaleType.STANINE: NormScaleConfig(
            scale_type=ScaleType.STANINE,
            name="Stanine (standard nine)",
            mean=5,
            sd=2,
            min=1,
            max=9,
            low_threshold=3,
            high_threshold=7,
        ),
        ScaleType.TSCORE: NormScaleConfig(
            scale_type=ScaleType.TSCORE,
            name="T-score",
            mean=50,
            sd=10,
            min=10,
            max=90,
            low_threshold=39,
            high_threshold=61,
        ),
        ScaleType.TETRON: NormScaleConfig(
            scale_type=ScaleType.TETRON,
            name="Tetron (0-20)",
            mean=10,
            sd=4,
            min=0,
            max=20,
            low_threshold=6,
            high_threshold=14,
        ),
    }
)


def get_scale(scale: ScaleType | str) -> NormScaleConfig:
    try:
        return NORM_SCALES[ScaleType(scale)]
    except ValueError as e:
        available = [s.value for s in ScaleType]
        raise InvalidInputError(
            f"Unknown norm scale: {scale}. Available scales: {available}"
        ) from e
