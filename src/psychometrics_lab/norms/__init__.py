"""
Norm scales and the raw-to-standard score transformation.
"""

from psychometrics_lab.norms.scales import (
    NORM_SCALES,
    NormScaleConfig,
    ScaleType,
    get_scale,
)
from psychometrics_lab.norms.transform import (
    NormScore,
    ScoreBand,
    transform_result_score,
    transform_score,
)

__all__ = [
    "NORM_SCALES",
    "NormScaleConfig",
    "NormScore",
    "ScaleType",
    "ScoreBand",
    "get_scale",
    "transform_result_score",
    "transform_score",
]
