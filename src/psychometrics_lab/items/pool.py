"""
The active item pool.

Keeps the ordered set of TestItems and owns the content-validity panel, so
every content change (add, edit, remove) invalidates the panel's verdict
in one place.
"""

import logging
from collections.abc import Iterable, Iterator

from numpy.random import Generator

from psychometrics_lab.core.data_models import (
    ItemSuggestion,
    Polarity,
    TestItem,
)
from psychometrics_lab.core.exceptions import (
    DuplicateItemError,
    InvalidInputError,
    ItemNotFoundError,
)
from psychometrics_lab.items.content_validity import (
    ContentValidityPanel,
    ContentValidityVerdict,
)

logger = logging.getLogger(__name__)

# Hidden quality assigned to suggested items
SUGGESTION_QUALITY_BOUNDS = (0.6, 1.0)


class ItemPool:
    def __init__(self, items: Iterable[TestItem] = ()) -> None:
        self._items: dict[str, TestItem] = {}
        self.panel = ContentValidityPanel()
        for item in items:
            self._insert(item)

    # --- Reads ---

    @property
    def items(self) -> tuple[TestItem, ...]:
        return tuple(self._items.values())

    @property
    def texts(self) -> list[str]:
        return [item.text for item in self._items.values()]

    def get(self, item_id: str) -> TestItem:
        try:
            return self._items[item_id]
        except KeyError:
            raise ItemNotFoundError(item_id) from None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[TestItem]:
        return iter(self.items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    # --- Content changes ---

    def _insert(self, item: TestItem) -> None:
        if item.id in self._items:
            raise DuplicateItemError(item.id)
        self._items[item.id] = item

    def add(self, item: TestItem) -> TestItem:
        self._insert(item)
        self.panel.invalidate()
        return item

    def add_manual(
        self, text: str, polarity: Polarity = Polarity.POSITIVE
    ) -> TestItem:
        """Add an item typed in by the user (no hidden quality score)."""
        text = text.strip()
        if not text:
            raise InvalidInputError("Item text must not be blank")
        return self.add(TestItem(text=text, polarity=polarity))

    def merge_suggestions(
        self,
        suggestions: Iterable[ItemSuggestion],
        rng: Generator,
    ) -> list[TestItem]:
        """Append suggested items, each with a simulated quality score."""
        added = []
        for suggestion in suggestions:
            text = suggestion.text.strip()
            if not text:
                continue
            item = TestItem(
                text=text,
                polarity=suggestion.polarity,
                quality_score=float(rng.uniform(*SUGGESTION_QUALITY_BOUNDS)),
            )
            self._insert(item)
            added.append(item)
        if added:
            self.panel.invalidate()
            logger.info("Merged %d suggested items", len(added))
        return added

    def edit_text(self, item_id: str, text: str) -> TestItem:
        """Replace an item's text. Blank text is rejected."""
        current = self.get(item_id)
        text = text.strip()
        if not text:
            raise InvalidInputError("Item text must not be blank")
        if text == current.text:
            return current
        updated = current.model_copy(update={"text": text})
        self._items[item_id] = updated
        self.panel.invalidate()
        return updated

    def remove(self, item_id: str) -> TestItem:
        removed = self.get(item_id)
        del self._items[item_id]
        self.panel.invalidate()
        return removed

    def clear(self) -> None:
        self._items.clear()
        self.panel.reset()

    # --- Derived state ---

    def apply_calibration(self, calibrated: Iterable[TestItem]) -> None:
        """Store simulated difficulty/discrimination on matching items.

        Items removed since the run started are skipped.
        """
        for item in calibrated:
            current = self._items.get(item.id)
            if current is None:
                continue
            self._items[item.id] = current.model_copy(
                update={
                    "difficulty": item.difficulty,
                    "discrimination": item.discrimination,
                }
            )

    def evaluate_content_validity(
        self, rng: Generator
    ) -> ContentValidityVerdict | None:
        return self.panel.evaluate(self.items, rng)


def generic_items(n_items: int) -> list[TestItem]:
    """Placeholder items for runs without a real item pool.

    Every fourth item is reverse-keyed.
    """
    if n_items < 1:
        raise InvalidInputError(f"n_items must be >= 1, got {n_items}")
    return [
        TestItem(
            id=f"item-{i:02d}",
            text=f"Generic item {i}",
            polarity=Polarity.NEGATIVE if i % 4 == 0 else Polarity.POSITIVE,
        )
        for i in range(1, n_items + 1)
    ]
