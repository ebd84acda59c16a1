from psychometrics_lab.items.content_validity import (
    ContentValidityPanel,
    ContentValidityStatus,
    ContentValidityVerdict,
)
from psychometrics_lab.items.pool import ItemPool, generic_items

__all__ = [
    "ContentValidityPanel",
    "ContentValidityStatus",
    "ContentValidityVerdict",
    "ItemPool",
    "generic_items",
]
