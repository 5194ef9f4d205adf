"""Shared variable store and promotion."""

from .base import InMemoryVariableStore, SharedVariableStore
from .promotion import PromotionResult, promote, promote_all

__all__ = [
    "SharedVariableStore",
    "InMemoryVariableStore",
    "PromotionResult",
    "promote",
    "promote_all",
]
