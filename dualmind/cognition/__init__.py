"""Cognition building blocks for DualMind.

This package houses the pieces the decision engine composes: the prompt
template and renderer, the fuzzy cache matcher, the executor contract, and
the fast/slow cadence configuration.
"""

from .prompts import PromptLibrary, PromptTemplate, DEFAULT_PROMPTS, OUTPUT_FIELDS
from .renderers import render_prompt, build_prompt
from .matcher import (
    SIMILARITY_THRESHOLD,
    CacheMatch,
    tokenize,
    similarity_score,
    find_best_match,
    find_best_cached_action,
)
from .executor import ActionExecutor, LoggingActionExecutor
from .cadence import DecisionCadence, Interval

__all__ = [
    "PromptLibrary",
    "PromptTemplate",
    "DEFAULT_PROMPTS",
    "OUTPUT_FIELDS",
    "render_prompt",
    "build_prompt",
    "SIMILARITY_THRESHOLD",
    "CacheMatch",
    "tokenize",
    "similarity_score",
    "find_best_match",
    "find_best_cached_action",
    "ActionExecutor",
    "LoggingActionExecutor",
    "DecisionCadence",
    "Interval",
]
