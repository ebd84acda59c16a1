"""
Simulated content-validity panel.

A panel of expert judges rates how well the item pool represents the
construct. The result is a single agreement coefficient (a Kendall's W
analogue) and a verdict.

The verdict is tracked by an explicit state machine:

    NOT_EVALUATED --evaluate--> EVALUATED --content edit--> STALE
    STALE --read--> NOT_EVALUATED

A stale verdict is never returned. Reading a stale panel yields no verdict
and moves the status back to NOT_EVALUATED.
"""

import logging
from collections.abc import Sequence
from enum import StrEnum

from numpy.random import Generator
from pydantic import BaseModel, ConfigDict, Field

from psychometrics_lab.core.data_models import TestItem

logger = logging.getLogger(__name__)

MIN_PANEL_ITEMS = 3
AGREEMENT_BOUNDS = (0.65, 0.95)
HIGH_AGREEMENT_THRESHOLD = 0.8

HIGH_AGREEMENT_MESSAGE = (
    "High agreement between judges (W > 0.8). The judges agree that the "
    "items represent the construct well."
)
MODERATE_AGREEMENT_MESSAGE = (
    "Moderate agreement between judges. Some items may be unclear or "
    "ambiguous and are worth revising."
)


class ContentValidityStatus(StrEnum):
    NOT_EVALUATED = "not_evaluated"
    EVALUATED = "evaluated"
    STALE = "stale"


class ContentValidityVerdict(BaseModel):
    model_config = ConfigDict(frozen=True)

    agreement: float = Field(..., ge=0.65, le=0.95)
    comment: str
    n_items: int = Field(..., ge=MIN_PANEL_ITEMS)

    @property
    def high_agreement(self) -> bool:
        return self.agreement > HIGH_AGREEMENT_THRESHOLD


def judge_agreement(agreement: float, n_items: int) -> ContentValidityVerdict:
    comment = (
        HIGH_AGREEMENT_MESSAGE
        if agreement > HIGH_AGREEMENT_THRESHOLD
        else MODERATE_AGREEMENT_MESSAGE
    )
    return ContentValidityVerdict(
        agreement=agreement, comment=comment, n_items=n_items
    )


class ContentValidityPanel:
    def __init__(self) -> None:
        self._status = ContentValidityStatus.NOT_EVALUATED
        self._verdict: ContentValidityVerdict | None = None

    @property
    def status(self) -> ContentValidityStatus:
        return self._status

    def evaluate(
        self, items: Sequence[TestItem], rng: Generator
    ) -> ContentValidityVerdict | None:
        """Convene the panel. With fewer than 3 items this is a no-op."""
        if len(items) < MIN_PANEL_ITEMS:
            logger.info(
                "Content validity panel needs %d items, pool has %d",
                MIN_PANEL_ITEMS,
                len(items),
            )
            return None

        agreement = float(rng.uniform(*AGREEMENT_BOUNDS))
        self._verdict = judge_agreement(agreement, len(items))
        self._status = ContentValidityStatus.EVALUATED
        logger.info("Content validity panel: W=%.2f", agreement)
        return self._verdict

    def invalidate(self) -> None:
        """Mark the verdict stale after the item content changed."""
        if self._status is ContentValidityStatus.EVALUATED:
            logger.info("Item content changed, content validity is stale")
            self._status = ContentValidityStatus.STALE
        self._verdict = None

    def read(self) -> ContentValidityVerdict | None:
        """Current verdict, or None when not (or no longer) evaluated."""
        if self._status is ContentValidityStatus.STALE:
            self._status = ContentValidityStatus.NOT_EVALUATED
        return self._verdict

    def reset(self) -> None:
        self._status = ContentValidityStatus.NOT_EVALUATED
        self._verdict = None
