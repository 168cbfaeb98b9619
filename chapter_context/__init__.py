"""Prioritized, budget-constrained context assembly for story chapters."""

from .base_builder import BaseContextBuilder
from .budget import TokenEstimator, fit_to_budget
from .chapter_builder import ChapterContextBuilder
from .context_models import BuiltContext, ContextItem, ContextItemType, Tier
from .errors import ContextAssemblyError, EntityNotFoundError
from .formatter import ContextSection, format_context
from .global_builder import GlobalContextBuilder

__all__ = [
    "BaseContextBuilder",
    "ChapterContextBuilder",
    "GlobalContextBuilder",
    "ContextItem",
    "ContextItemType",
    "BuiltContext",
    "Tier",
    "TokenEstimator",
    "fit_to_budget",
    "format_context",
    "ContextSection",
    "ContextAssemblyError",
    "EntityNotFoundError",
]
