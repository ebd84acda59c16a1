from collections.abc import Sequence

import pytest

from psychometrics_lab.collaborators.base import (
    DEFAULT_CRITIQUE,
    FALLBACK_CRITIQUE,
    FALLBACK_ITEMS,
    DefinitionCritic,
    ItemSuggester,
    OfflineDefinitionCritic,
    OfflineItemSuggester,
    critique_or_fallback,
    suggest_items_or_fallback,
)
from psychometrics_lab.core.data_models import (
    ConstructDefinition,
    ItemSuggestion,
    Polarity,
)
from psychometrics_lab.core.exceptions import ExternalCollaboratorError

CONSTRUCT = ConstructDefinition(
    name="Procrastination",
    description="Habitual postponing of intended tasks.",
)


class FixedSuggester(ItemSuggester):
    def __init__(self, suggestions: list[ItemSuggestion]) -> None:
        self.suggestions = suggestions
        self.seen_existing: list[str] = []

    async def suggest_items(
        self,
        construct: ConstructDefinition,
        existing_items: Sequence[str],
    ) -> list[ItemSuggestion]:
        self.seen_existing = list(existing_items)
        return self.suggestions


class FailingSuggester(ItemSuggester):
    def __init__(self, error: Exception) -> None:
        self.error = error

    async def suggest_items(
        self,
        construct: ConstructDefinition,
        existing_items: Sequence[str],
    ) -> list[ItemSuggestion]:
        raise self.error


class FixedCritic(DefinitionCritic):
    def __init__(self, text: str) -> None:
        self.text = text

    async def critique(self, description: str) -> str:
        return self.text


class FailingCritic(DefinitionCritic):
    async def critique(self, description: str) -> str:
        raise ExternalCollaboratorError("service down")


def test_fallback_items_are_five_generic_items() -> None:
    assert len(FALLBACK_ITEMS) == 5
    polarities = {item.polarity for item in FALLBACK_ITEMS}
    assert polarities == {Polarity.POSITIVE, Polarity.NEGATIVE}


class TestSuggestItemsOrFallback:
    @pytest.mark.asyncio
    async def test_passes_through_suggestions(self) -> None:
        suggestion = ItemSuggestion(
            text="I put things off.", polarity=Polarity.POSITIVE
        )
        suggester = FixedSuggester([suggestion])
        result = await suggest_items_or_fallback(
            suggester, CONSTRUCT, ["Existing item"]
        )
        assert result == [suggestion]
        assert suggester.seen_existing == ["Existing item"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [ExternalCollaboratorError("timeout"), RuntimeError("unexpected")],
    )
    async def test_failure_returns_fallback(self, error: Exception) -> None:
        result = await suggest_items_or_fallback(
            FailingSuggester(error), CONSTRUCT, []
        )
        assert result == list(FALLBACK_ITEMS)

    @pytest.mark.asyncio
    async def test_empty_answer_returns_fallback(self) -> None:
        result = await suggest_items_or_fallback(
            FixedSuggester([]), CONSTRUCT, []
        )
        assert result == list(FALLBACK_ITEMS)

    @pytest.mark.asyncio
    async def test_offline_suggester(self) -> None:
        result = await suggest_items_or_fallback(
            OfflineItemSuggester(), CONSTRUCT, []
        )
        assert result == list(FALLBACK_ITEMS)


class TestCritiqueOrFallback:
    @pytest.mark.asyncio
    async def test_passes_through_critique(self) -> None:
        result = await critique_or_fallback(
            FixedCritic("  Quite operational.  "), "description"
        )
        assert result == "Quite operational."

    @pytest.mark.asyncio
    async def test_failure_returns_neutral_message(self) -> None:
        result = await critique_or_fallback(FailingCritic(), "description")
        assert result == FALLBACK_CRITIQUE

    @pytest.mark.asyncio
    async def test_empty_critique_returns_default(self) -> None:
        result = await critique_or_fallback(FixedCritic(""), "description")
        assert result == DEFAULT_CRITIQUE

    @pytest.mark.asyncio
    async def test_offline_critic(self) -> None:
        result = await critique_or_fallback(
            OfflineDefinitionCritic(), "description"
        )
        assert result == FALLBACK_CRITIQUE
