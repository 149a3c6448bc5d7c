"""Fuzzy matching of prompts against the behaviour cache.

The reflexive path reuses a cached action when the current prompt is close
enough to a prompt the reasoning backend has already answered. Similarity is a
symmetric token-overlap ratio:

    score = |set(Q) ∩ set(E)| / ((len(Q) + len(E)) / 2)

where ``Q`` and ``E`` are the token lists of the query and the cached prompt.
The intersection counts each distinct token once while the lengths count
duplicates, so repeated words pull the score below 1.0 even for identical
prompts. Keep prompt templates low on repetition.

Matching is a linear scan, O(entries x tokens) per query.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Tuple

from dualmind.schemas import AgentAction, BehaviourCacheEntry


SIMILARITY_THRESHOLD = 0.8
"""Minimum score (inclusive) for a cached action to be reused."""

_TOKEN_SPLIT = re.compile(r"[\s.,]+")


@dataclass(frozen=True)
class CacheMatch:
    """Best-scoring cache entry for a query, with its score."""

    entry: BehaviourCacheEntry
    score: float

    @property
    def action(self) -> AgentAction:
        return self.entry.action


def tokenize(text: str) -> List[str]:
    """Lowercase ``text`` and split on whitespace, periods and commas."""

    return [token for token in _TOKEN_SPLIT.split(text.lower()) if token]


def _profile(text: str) -> Tuple[FrozenSet[str], int]:
    """Distinct tokens of ``text`` and its total token count."""

    tokens = tokenize(text)
    return frozenset(tokens), len(tokens)


def _overlap(query: Tuple[FrozenSet[str], int], candidate: Tuple[FrozenSet[str], int]) -> float:
    query_tokens, query_length = query
    candidate_tokens, candidate_length = candidate
    total = query_length + candidate_length
    if total == 0:
        return 0.0
    return len(query_tokens & candidate_tokens) / (total / 2)


def similarity_score(query: str, candidate: str) -> float:
    """Return the symmetric token-overlap score of two prompts, in [0, 1]."""

    return _overlap(_profile(query), _profile(candidate))


def find_best_match(
    prompt: str,
    entries: Iterable[BehaviourCacheEntry],
) -> Optional[CacheMatch]:
    """Return the highest-scoring entry regardless of threshold.

    Ties keep the first entry seen; entries scoring 0 never win.
    """

    query = _profile(prompt)
    best: Optional[CacheMatch] = None
    for entry in entries:
        score = _overlap(query, _profile(entry.context_prompt))
        # Strictly greater: first-seen entry wins ties
        if score > (best.score if best is not None else 0.0):
            best = CacheMatch(entry=entry, score=score)
    return best


def find_best_cached_action(
    prompt: str,
    entries: Iterable[BehaviourCacheEntry],
    *,
    threshold: float = SIMILARITY_THRESHOLD,
) -> Optional[AgentAction]:
    """Return the best cached action if its score clears ``threshold``, else None."""

    match = find_best_match(prompt, entries)
    if match is None or match.score < threshold:
        return None
    return match.action
