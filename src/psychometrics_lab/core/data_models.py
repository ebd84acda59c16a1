"""
Data models shared by the item pool, the engines and the API.

This module defines:
- TestItem: one candidate questionnaire statement
- ConstructDefinition: the trait the questionnaire is meant to measure
"""

import uuid
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Descriptions shorter than this are not worth sending for critique
MIN_DEFINITION_LENGTH = 10


class Polarity(StrEnum):
    """Keying direction of an item. Negative items are reverse-scored."""

    POSITIVE = "positive"
    NEGATIVE = "negative"


def new_item_id() -> str:
    return uuid.uuid4().hex[:12]


class TestItem(BaseModel):
    """
    A candidate questionnaire statement.

    Items are immutable values; text edits go through ``ItemPool.edit_text``
    which swaps in an updated copy under the same id.

    Attributes:
        id: Unique, stable identifier.
        text: Statement shown to respondents.
        polarity: Keying direction, fixed at creation.
        quality_score: Hidden simulated quality in [0, 1].
        difficulty: Simulated endorsement probability in [0, 1].
        discrimination: Simulated item-total correlation analogue (> 0).
    """

    # Not a pytest test class despite the name
    __test__ = False

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_item_id, min_length=1)
    text: str = Field(..., min_length=1)
    polarity: Polarity = Polarity.POSITIVE
    quality_score: float | None = Field(default=None, ge=0.0, le=1.0)
    difficulty: float | None = Field(default=None, ge=0.0, le=1.0)
    discrimination: float | None = Field(default=None, gt=0.0)

    @model_validator(mode="after")
    def check_calibration_pair(self) -> "TestItem":
        if (self.difficulty is None) != (self.discrimination is None):
            raise ValueError(
                "difficulty and discrimination must be set together"
            )
        return self

    @property
    def is_calibrated(self) -> bool:
        return self.difficulty is not None

    @property
    def is_reversed(self) -> bool:
        return self.polarity is Polarity.NEGATIVE


class ConstructDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: str = ""

    @property
    def is_ready_for_critique(self) -> bool:
        return len(self.description.strip()) >= MIN_DEFINITION_LENGTH


class ItemSuggestion(BaseModel):
    """A candidate item proposed by an item suggester."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1)
    polarity: Polarity
    rationale: str = ""
