"""
In-memory state of one student's walk through the wizard.

A SessionState is owned by whoever drives the engines (the API app, a
script) and is passed around explicitly. It holds the construct, the item
pool with its content-validity panel, the latest simulation result, the
run history and the random generator every engine draws from.
"""

import logging
import threading

from numpy.random import Generator

from psychometrics_lab.collaborators.base import (
    DefinitionCritic,
    ItemSuggester,
    OfflineDefinitionCritic,
    OfflineItemSuggester,
    critique_or_fallback,
    suggest_items_or_fallback,
)
from psychometrics_lab.core.constructs import random_example_construct
from psychometrics_lab.core.data_models import ConstructDefinition, TestItem
from psychometrics_lab.core.exceptions import InvalidInputError
from psychometrics_lab.core.utils import get_rng
from psychometrics_lab.items.content_validity import ContentValidityVerdict
from psychometrics_lab.items.pool import ItemPool
from psychometrics_lab.norms.scales import NormScaleConfig, ScaleType
from psychometrics_lab.norms.transform import (
    NormScore,
    transform_result_score,
)
from psychometrics_lab.simulation.config import SimulationParameters
from psychometrics_lab.simulation.data_models import SimulationResult
from psychometrics_lab.simulation.engine import run_simulation
from psychometrics_lab.simulation.history import RunHistory, SimulationRun

logger = logging.getLogger(__name__)


class SessionState:
    def __init__(
        self,
        rng: Generator | None = None,
        suggester: ItemSuggester | None = None,
        critic: DefinitionCritic | None = None,
    ) -> None:
        self.rng = rng if rng is not None else get_rng()
        self.suggester = suggester or OfflineItemSuggester()
        self.critic = critic or OfflineDefinitionCritic()
        self.construct = ConstructDefinition()
        self.pool = ItemPool()
        self.history = RunHistory()
        self.latest_result: SimulationResult | None = None
        # Serializes runs so pool calibration and history stay in step
        self._run_lock = threading.Lock()

    # --- Construct ---

    def set_construct(
        self, name: str, description: str
    ) -> ConstructDefinition:
        self.construct = ConstructDefinition(
            name=name.strip(), description=description.strip()
        )
        return self.construct

    async def critique_construct(self) -> str | None:
        """Critique of the current definition, or None if it is too short."""
        if not self.construct.is_ready_for_critique:
            return None
        return await critique_or_fallback(
            self.critic, self.construct.description
        )

    def use_example_construct(self) -> ConstructDefinition:
        """Replace the construct with one drawn from the example catalogue."""
        self.construct = random_example_construct(self.rng)
        return self.construct

    # --- Items ---

    async def request_suggestions(
        self, limit: int | None = None
    ) -> list[TestItem]:
        """Ask for new items and merge up to `limit` of them into the pool."""
        suggestions = list(
            await suggest_items_or_fallback(
                self.suggester, self.construct, self.pool.texts
            )
        )
        if limit is not None and len(suggestions) > limit:
            logger.info(
                "Keeping %d of %d suggested items", limit, len(suggestions)
            )
            suggestions = suggestions[:limit]
        return self.pool.merge_suggestions(suggestions, self.rng)

    def evaluate_content_validity(self) -> ContentValidityVerdict | None:
        return self.pool.evaluate_content_validity(self.rng)

    # --- Simulation ---

    def run(
        self, parameters: SimulationParameters
    ) -> tuple[SimulationResult, SimulationRun]:
        """Simulate against the current pool and record the run.

        Raises:
            InvalidInputError: If the pool is empty.
        """
        with self._run_lock:
            result = run_simulation(self.pool.items, parameters, self.rng)
            self.pool.apply_calibration(result.items)
            self.latest_result = result
            run = self.history.append(result)
        return result, run

    def norm_score(
        self,
        raw_score: float,
        scale: NormScaleConfig | ScaleType | str,
    ) -> NormScore:
        if self.latest_result is None:
            raise InvalidInputError(
                "Run a simulation before converting scores to norms"
            )
        return transform_result_score(raw_score, self.latest_result, scale)

    def reset(self) -> None:
        """Start over. The run history is append-only and survives."""
        with self._run_lock:
            self.construct = ConstructDefinition()
            self.pool.clear()
            self.latest_result = None
        logger.info("Session reset, %d runs kept", len(self.history))
