"""
Qualitative readings of simulated indices.

These helpers turn numbers into the verdicts a student sees next to them:
reliability bands, fit verdicts and per-item flags.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from psychometrics_lab.core.data_models import TestItem
from psychometrics_lab.simulation.data_models import FitIndices
from psychometrics_lab.simulation.model_fit import GOOD_CFI, GOOD_RMSEA

# Item screening cut-offs
MIN_ITEM_DIFFICULTY = 0.2
MAX_ITEM_DIFFICULTY = 0.8
MIN_ITEM_DISCRIMINATION = 0.2


class ReliabilityBand(StrEnum):
    EXCELLENT = "excellent"
    GOOD = "good"
    QUESTIONABLE = "questionable"
    POOR = "poor"


class ItemFlag(StrEnum):
    TOO_DIFFICULT = "too difficult"
    TOO_EASY = "too easy"
    LOW_DISCRIMINATION = "low discrimination"


class ItemDiagnosis(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_id: str
    calibrated: bool
    flags: tuple[ItemFlag, ...] = ()

    @property
    def is_good(self) -> bool:
        return self.calibrated and not self.flags

    @property
    def summary(self) -> str:
        if not self.calibrated:
            return "not yet calibrated"
        if not self.flags:
            return "good item"
        return ", ".join(flag.value for flag in self.flags)


class FitVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    cfi_good: bool
    rmsea_good: bool

    @property
    def acceptable(self) -> bool:
        return self.cfi_good and self.rmsea_good


def classify_reliability(alpha: float) -> ReliabilityBand:
    if alpha >= 0.9:
        return ReliabilityBand.EXCELLENT
    if alpha >= 0.7:
        return ReliabilityBand.GOOD
    if alpha >= 0.6:
        return ReliabilityBand.QUESTIONABLE
    return ReliabilityBand.POOR


def judge_fit(fit: FitIndices) -> FitVerdict:
    return FitVerdict(
        cfi_good=fit.cfi >= GOOD_CFI, rmsea_good=fit.rmsea < GOOD_RMSEA
    )


def diagnose_item(item: TestItem) -> ItemDiagnosis:
    if item.difficulty is None or item.discrimination is None:
        return ItemDiagnosis(item_id=item.id, calibrated=False)

    flags = []
    if item.difficulty < MIN_ITEM_DIFFICULTY:
        flags.append(ItemFlag.TOO_DIFFICULT)
    if item.difficulty > MAX_ITEM_DIFFICULTY:
        flags.append(ItemFlag.TOO_EASY)
    if item.discrimination < MIN_ITEM_DISCRIMINATION:
        flags.append(ItemFlag.LOW_DISCRIMINATION)
    return ItemDiagnosis(item_id=item.id, calibrated=True, flags=tuple(flags))
