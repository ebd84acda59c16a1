"""
Data structures emitted by the simulation engines.

Only contracts live here; the formulas live in the engine modules. Every
record is frozen and refuses NaN/inf, so nothing non-finite can reach a
renderer.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from psychometrics_lab.core.data_models import TestItem
from psychometrics_lab.simulation.config import SimulationParameters

_RECORD_CONFIG = ConfigDict(frozen=True, allow_inf_nan=False)


class ReliabilityIndices(BaseModel):
    model_config = _RECORD_CONFIG

    n_items: int = Field(..., ge=1)
    effective_correlation: float = Field(..., ge=0.05, le=0.95)
    cronbach_alpha: float = Field(..., ge=0.0, le=1.0)
    split_half_reliability: float = Field(..., ge=0.01, le=0.99)
    max_score: float = Field(..., gt=0.0)
    mean_score: float = Field(..., ge=0.0)
    standard_deviation: float = Field(..., gt=0.0)
    sem: float = Field(..., ge=0.0)
    confidence_interval: float = Field(..., ge=0.0)


class ValidityIndices(BaseModel):
    model_config = _RECORD_CONFIG

    variance_explained: float = Field(..., ge=20.0, le=85.0)
    convergent_validity: float = Field(..., ge=0.1, le=0.92)
    discriminant_validity: float = Field(..., ge=0.05, le=0.8)
    criterion_validity: float = Field(..., ge=0.1, le=0.85)


class FitIndices(BaseModel):
    model_config = _RECORD_CONFIG

    cfi: float = Field(..., ge=0.60, le=0.99)
    rmsea: float = Field(..., ge=0.01, le=0.20)
    srmr: float = Field(..., ge=0.0, le=0.20)


class DistributionPoint(BaseModel):
    """One grid point of the control vs. clinical histogram/density chart."""

    model_config = _RECORD_CONFIG

    score: float
    control_density: float = Field(..., ge=0.0)
    clinical_density: float = Field(..., ge=0.0)
    control_freq: int = Field(..., ge=0)
    clinical_freq: int = Field(..., ge=0)


class GroupComparison(BaseModel):
    model_config = _RECORD_CONFIG

    control_group_mean: float
    clinical_group_mean: float
    pooled_sd: float = Field(..., gt=0.0)
    effect_size: float
    z_score: float
    u_value: int = Field(..., ge=0)
    p_value: float = Field(..., ge=0.001, le=1.0)
    distribution: tuple[DistributionPoint, ...]


class InformationPoint(BaseModel):
    """Test information and local SEM at one latent trait value."""

    model_config = _RECORD_CONFIG

    theta: float
    info: float = Field(..., gt=0.0)
    sem: float = Field(..., gt=0.0)


class ItemCorrelation(BaseModel):
    model_config = _RECORD_CONFIG

    item_id: str
    correlation: float


class SimulationResult(BaseModel):
    """
    Complete output of one simulation run.

    Owned by the caller; the engines keep no reference to it.
    """

    model_config = _RECORD_CONFIG

    parameters: SimulationParameters
    sample_size: int
    reliability: ReliabilityIndices
    validity: ValidityIndices
    fit: FitIndices
    group_comparison: GroupComparison
    test_information: tuple[InformationPoint, ...]
    items: tuple[TestItem, ...]

    @model_validator(mode="after")
    def check_sample_size(self) -> "SimulationResult":
        if self.sample_size != self.parameters.sample_size:
            raise ValueError(
                f"sample_size={self.sample_size} does not match "
                f"parameters.sample_size={self.parameters.sample_size}"
            )
        return self

    @property
    def item_correlations(self) -> list[ItemCorrelation]:
        """Simulated item-total correlations (the items' discriminations)."""
        return [
            ItemCorrelation(
                item_id=item.id, correlation=item.discrimination or 0.0
            )
            for item in self.items
        ]
