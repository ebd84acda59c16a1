from pydantic import BaseModel, Field

from psychometrics_lab.core.data_models import Polarity, TestItem
from psychometrics_lab.items.content_validity import (
    ContentValidityStatus,
    ContentValidityVerdict,
)
from psychometrics_lab.norms.scales import ScaleType
from psychometrics_lab.norms.transform import (
    DisplayRange,
    NormCurvePoint,
    NormScore,
    ScaleBoundary,
)
from psychometrics_lab.simulation.config import (
    DEFAULT_CONSTRUCT_QUALITY,
    DEFAULT_ITEM_COHESION,
    DEFAULT_SAMPLE_SIZE,
    SimulationParameters,
)
from psychometrics_lab.simulation.data_models import (
    ItemCorrelation,
    SimulationResult,
)
from psychometrics_lab.simulation.diagnostics import (
    FitVerdict,
    ItemDiagnosis,
    ReliabilityBand,
    classify_reliability,
    diagnose_item,
    judge_fit,
)
from psychometrics_lab.simulation.history import SimulationRun

# --- Request schemas ---


class ConstructRequest(BaseModel):
    name: str = ""
    description: str = ""


class ItemCreateRequest(BaseModel):
    text: str = Field(min_length=1)
    polarity: Polarity = Polarity.POSITIVE


class ItemUpdateRequest(BaseModel):
    text: str = Field(min_length=1)


class SimulationRequest(BaseModel):
    sample_size: int = DEFAULT_SAMPLE_SIZE
    item_cohesion: float = DEFAULT_ITEM_COHESION
    construct_quality: float = DEFAULT_CONSTRUCT_QUALITY

    def to_domain(self) -> SimulationParameters:
        return SimulationParameters(
            sample_size=self.sample_size,
            item_cohesion=self.item_cohesion,
            construct_quality=self.construct_quality,
        )


class NormRequest(BaseModel):
    raw_score: float
    scale: ScaleType = ScaleType.STEN


# --- Response schemas ---


class CritiqueResponse(BaseModel):
    ready: bool
    critique: str | None = None


class ItemListResponse(BaseModel):
    items: list[TestItem]
    content_validity_status: ContentValidityStatus


class SuggestionsResponse(BaseModel):
    added: list[TestItem]


class ContentValidityResponse(BaseModel):
    status: ContentValidityStatus
    verdict: ContentValidityVerdict | None = None


class SimulationResponse(BaseModel):
    run_id: int
    result: SimulationResult
    reliability_band: ReliabilityBand
    fit_verdict: FitVerdict
    fit_acceptable: bool
    item_correlations: list[ItemCorrelation]
    item_diagnostics: list[ItemDiagnosis]

    @classmethod
    def from_result(
        cls, result: SimulationResult, run_id: int
    ) -> "SimulationResponse":
        fit_verdict = judge_fit(result.fit)
        return cls(
            run_id=run_id,
            result=result,
            reliability_band=classify_reliability(
                result.reliability.cronbach_alpha
            ),
            fit_verdict=fit_verdict,
            fit_acceptable=fit_verdict.acceptable,
            item_correlations=result.item_correlations,
            item_diagnostics=[diagnose_item(item) for item in result.items],
        )


class HistoryResponse(BaseModel):
    runs: list[SimulationRun]


class NormResponse(BaseModel):
    score: NormScore
    display_range: DisplayRange
    boundaries: list[ScaleBoundary]
    curves: list[NormCurvePoint]


class ErrorDetail(BaseModel):
    code: str
    message: str
    request_id: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
