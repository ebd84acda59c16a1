"""
Append-only log of completed simulation runs.
"""

import logging
import threading
from collections.abc import Iterator
from datetime import UTC, datetime

import pandas as pd
from pydantic import BaseModel, ConfigDict

from psychometrics_lab.simulation.data_models import SimulationResult

logger = logging.getLogger(__name__)


class SimulationRun(BaseModel):
    """Condensed snapshot of one run: its inputs and headline outputs."""

    model_config = ConfigDict(frozen=True)

    run_id: int
    created_at: datetime
    sample_size: int
    item_cohesion: float
    construct_quality: float
    n_items: int
    cronbach_alpha: float
    sem: float
    confidence_interval: float


class RunHistory:
    """
    Insertion-ordered log of SimulationRun records.

    Records are never mutated or removed. Appends are serialized with a
    lock so concurrent runs each get their own slot and run id.
    """

    def __init__(self) -> None:
        self._runs: list[SimulationRun] = []
        self._lock = threading.Lock()

    def append(self, result: SimulationResult) -> SimulationRun:
        params = result.parameters
        with self._lock:
            run = SimulationRun(
                run_id=len(self._runs) + 1,
                created_at=datetime.now(UTC),
                sample_size=result.sample_size,
                item_cohesion=params.item_cohesion,
                construct_quality=params.construct_quality,
                n_items=result.reliability.n_items,
                cronbach_alpha=result.reliability.cronbach_alpha,
                sem=result.reliability.sem,
                confidence_interval=result.reliability.confidence_interval,
            )
            self._runs.append(run)
        logger.info(
            "Run %d recorded: N=%d alpha=%.3f",
            run.run_id,
            run.sample_size,
            run.cronbach_alpha,
        )
        return run

    @property
    def runs(self) -> tuple[SimulationRun, ...]:
        with self._lock:
            return tuple(self._runs)

    def __len__(self) -> int:
        return len(self._runs)

    def __iter__(self) -> Iterator[SimulationRun]:
        return iter(self.runs)

    def to_dataframe(self) -> pd.DataFrame:
        columns = list(SimulationRun.model_fields)
        return pd.DataFrame(
            [run.model_dump() for run in self.runs], columns=columns
        )
