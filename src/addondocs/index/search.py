"""Term-frequency search over the in-memory knowledge base."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from addondocs.models import Corpus, KnowledgeItem
from addondocs.utils.text import split_terms

MAX_RESULTS = 10

TITLE_WEIGHT = 3
TAG_WEIGHT = 2
CONTENT_WEIGHT = 1
PARENT_TITLE_BONUS = 1
TARGET_SOURCE_BONUS = 1

_TARGET_ALIASES = {
    "express_sdk": "express_sdk",
    "sdk": "express_sdk",
    "spectrum_web_components": "spectrum_web_components",
    "component-library": "spectrum_web_components",
    "all": "all",
}


def normalize_target_hint(hint: Optional[str]) -> Optional[str]:
    """Map a caller supplied source hint to a corpus name, ``"all"`` or None.

    Raises ``ValueError`` for hints that name no known corpus.
    """
    if hint is None or not hint.strip():
        return None
    key = hint.strip().lower()
    if key not in _TARGET_ALIASES:
        raise ValueError(f"Unknown target source: {hint!r}")
    return _TARGET_ALIASES[key]


def resolve_target_source(query_text: str, hint: Optional[str] = None) -> Optional[Corpus]:
    """Corpus a query should prefer, or None when it is unconstrained."""
    target = normalize_target_hint(hint)
    if target == "all":
        return None
    if target is not None:
        return target  # type: ignore[return-value]

    lowered = query_text.lower()
    if "spectrum" in lowered or lowered.startswith("sp-"):
        return "spectrum_web_components"
    if "express" in lowered or "addon" in lowered:
        return "express_sdk"
    return None


def score_item(
    item: KnowledgeItem,
    terms: Sequence[str],
    query_lower: str,
    target_source: Optional[str] = None,
) -> int:
    title = item.title.lower()
    content = item.content.lower()
    tags = [tag.lower() for tag in item.tags]

    score = 0
    for term in terms:
        if term in title:
            score += TITLE_WEIGHT
        if any(term in tag for tag in tags):
            score += TAG_WEIGHT
        if term in content:
            score += CONTENT_WEIGHT
    if item.parent_title and query_lower in item.parent_title.lower():
        score += PARENT_TITLE_BONUS
    if target_source is not None and item.data_source == target_source:
        score += TARGET_SOURCE_BONUS
    return score


@dataclass(slots=True)
class SearchResult:
    item: KnowledgeItem
    score: int


def rank_items(
    query: str,
    items: Sequence[KnowledgeItem],
    *,
    target_source: Optional[str] = None,
    top_k: int = MAX_RESULTS,
) -> List[SearchResult]:
    """Score ``items`` against ``query`` and return the best matches.

    Items scoring zero are dropped. Ties keep collection order.
    """
    query_lower = query.lower()
    terms = split_terms(query, min_length=2)
    scored = []
    for item in items:
        score = score_item(item, terms, query_lower, target_source)
        if score > 0:
            scored.append(SearchResult(item=item, score=score))

    scored.sort(key=lambda result: result.score, reverse=True)
    return scored[: max(0, min(top_k, MAX_RESULTS))]


class Searcher:
    """High-level API to query a loaded knowledge base."""

    def __init__(self, items: Sequence[KnowledgeItem]) -> None:
        self.items = tuple(items)

    def search(
        self,
        query: str,
        *,
        target_source: Optional[str] = None,
        top_k: int = MAX_RESULTS,
    ) -> List[SearchResult]:
        resolved = resolve_target_source(query, target_source)
        return rank_items(query, self.items, target_source=resolved, top_k=top_k)
