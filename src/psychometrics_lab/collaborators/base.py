"""
Text-generation collaborators: interfaces and fallbacks.

The engines never talk to a language model directly. They receive item
texts from an ItemSuggester and show a critique from a DefinitionCritic.
Both calls may fail; ``suggest_items_or_fallback`` and
``critique_or_fallback`` turn any failure into fixed, usable output so the
user is never blocked.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from psychometrics_lab.core.data_models import (
    ConstructDefinition,
    ItemSuggestion,
    Polarity,
)

logger = logging.getLogger(__name__)

FALLBACK_RATIONALE = "Fallback item, the item generator was unavailable."

FALLBACK_ITEMS: tuple[ItemSuggestion, ...] = (
    ItemSuggestion(
        text="I feel competent in this area.",
        polarity=Polarity.POSITIVE,
        rationale=FALLBACK_RATIONALE,
    ),
    ItemSuggestion(
        text="I often struggle with this topic.",
        polarity=Polarity.NEGATIVE,
        rationale=FALLBACK_RATIONALE,
    ),
    ItemSuggestion(
        text="I rarely manage to achieve the goals I set.",
        polarity=Polarity.NEGATIVE,
        rationale=FALLBACK_RATIONALE,
    ),
    ItemSuggestion(
        text="Others see me as an effective person.",
        polarity=Polarity.POSITIVE,
        rationale=FALLBACK_RATIONALE,
    ),
    ItemSuggestion(
        text="I stay calm in stressful situations.",
        polarity=Polarity.POSITIVE,
        rationale=FALLBACK_RATIONALE,
    ),
)

# Shown when the critic returns nothing
DEFAULT_CRITIQUE = "The definition looks reasonable."
# Shown when the critic fails
FALLBACK_CRITIQUE = "Feedback on the definition is unavailable right now."


class ItemSuggester(ABC):
    """Drafts candidate items for a construct."""

    @abstractmethod
    async def suggest_items(
        self,
        construct: ConstructDefinition,
        existing_items: Sequence[str],
    ) -> list[ItemSuggestion]:
        """
        Propose new items.

        Args:
            construct: Name and description of the construct.
            existing_items: Texts already in the pool, not to be repeated.

        Returns:
            Candidate items with polarity and rationale.

        Raises:
            ExternalCollaboratorError: If the suggestion service fails.
        """
        ...


class DefinitionCritic(ABC):
    """Comments on how operational a construct definition is."""

    @abstractmethod
    async def critique(self, description: str) -> str:
        """
        Raises:
            ExternalCollaboratorError: If the critique service fails.
        """
        ...


class OfflineItemSuggester(ItemSuggester):
    """Suggester used when no language model is configured."""

    async def suggest_items(
        self,
        construct: ConstructDefinition,
        existing_items: Sequence[str],
    ) -> list[ItemSuggestion]:
        return list(FALLBACK_ITEMS)


class OfflineDefinitionCritic(DefinitionCritic):
    async def critique(self, description: str) -> str:
        return FALLBACK_CRITIQUE


async def suggest_items_or_fallback(
    suggester: ItemSuggester,
    construct: ConstructDefinition,
    existing_items: Sequence[str],
) -> list[ItemSuggestion]:
    """Ask the suggester for items, falling back to FALLBACK_ITEMS.

    Also falls back when the suggester answers with no items, so callers
    can rely on a non-empty list.
    """
    try:
        suggestions = await suggester.suggest_items(construct, existing_items)
    except Exception:
        logger.exception("Item suggestion failed, using fallback items")
        return list(FALLBACK_ITEMS)

    if not suggestions:
        logger.warning("Item suggester returned nothing, using fallback items")
        return list(FALLBACK_ITEMS)
    return suggestions


async def critique_or_fallback(
    critic: DefinitionCritic, description: str
) -> str:
    try:
        critique = await critic.critique(description)
    except Exception:
        logger.exception("Definition critique failed")
        return FALLBACK_CRITIQUE
    return critique.strip() or DEFAULT_CRITIQUE
