"""
Core shared types and utilities for the psychometrics lab.

This module provides foundational components used across the simulation
engines, the item pool and the norm transformation, so that none of them
depend on each other for basic helpers.
"""

from psychometrics_lab.core.exceptions import (
    DuplicateItemError,
    ExternalCollaboratorError,
    InvalidInputError,
    ItemNotFoundError,
)
from psychometrics_lab.core.utils import clamp, get_rng, round_half_up

__all__ = [
    "DuplicateItemError",
    "ExternalCollaboratorError",
    "InvalidInputError",
    "ItemNotFoundError",
    "clamp",
    "get_rng",
    "round_half_up",
]
