from psychometrics_lab.collaborators.base import (
    FALLBACK_CRITIQUE,
    FALLBACK_ITEMS,
    DefinitionCritic,
    ItemSuggester,
    OfflineDefinitionCritic,
    OfflineItemSuggester,
    critique_or_fallback,
    suggest_items_or_fallback,
)

__all__ = [
    "FALLBACK_CRITIQUE",
    "FALLBACK_ITEMS",
    "DefinitionCritic",
    "ItemSuggester",
    "OfflineDefinitionCritic",
    "OfflineItemSuggester",
    "critique_or_fallback",
    "suggest_items_or_fallback",
]
