"""Query routing between the local knowledge base and live GitHub search."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from addondocs.config import MODES, AppConfig
from addondocs.index.search import MAX_RESULTS, rank_items, resolve_target_source
from addondocs.index.storage import KnowledgeBaseStore
from addondocs.models import CodeSample, KnowledgeItem, Mode, QueryResponse
from addondocs.remote.github import GitHubDocClient

LOGGER = logging.getLogger(__name__)

AGENT_NAME = "adobe-express-developer-assistant"
AGENT_DESCRIPTION = (
    "Developer assistant for Adobe Express Add-on and Spectrum Web Components development"
)
FALLBACK_KEYWORDS = ("adobe express", "sdk", "addon", "spectrum", "web components", "sp-button")
MAX_KEYWORDS = 40
SUMMARY_SNIPPET_CHARS = 300

# Relative ordering matters more than the values:
# prior/empty < no match < matches filtered out < match
CONFIDENCE_PRIOR = 0.2
CONFIDENCE_LOCAL_NO_MATCH = 0.3
CONFIDENCE_REMOTE_FILTERED = 0.35
CONFIDENCE_REMOTE_MATCH = 0.7
CONFIDENCE_LOCAL_MATCH = 0.8


class InvalidModeError(ValueError):
    """Raised when asked to switch to an unknown knowledge source mode."""


def placeholder(kind: str, title: str, content: str, source_hint: str, tags: Sequence[str]) -> KnowledgeItem:
    return KnowledgeItem(
        kind=kind,
        title=title,
        content=content,
        source_hint=source_hint,
        tags=tuple(tags),
        data_source="unknown",
    )


def format_summary(query_text: str, results: Sequence[KnowledgeItem], mode: str) -> str:
    lines = [f'Found {len(results)} results for "{query_text}" in {mode} mode:']
    for item in results:
        snippet = item.content[:SUMMARY_SNIPPET_CHARS]
        if len(item.content) > SUMMARY_SNIPPET_CHARS:
            snippet += "..."
        lines.append(f"\n## {item.title}\n{snippet}\n")
    return "\n".join(lines)


class QueryRouter:
    """Owns the current knowledge source mode and answers documentation queries."""

    def __init__(
        self,
        config: AppConfig,
        *,
        store: Optional[KnowledgeBaseStore] = None,
        remote: Optional[GitHubDocClient] = None,
    ) -> None:
        self.config = config
        self.store = store or KnowledgeBaseStore(config.resolve_index_path(Path.cwd()))
        self.remote = remote or GitHubDocClient(config)
        self._mode: Mode = config.mode
        self._collection: Tuple[KnowledgeItem, ...] = ()
        LOGGER.info("Initial knowledge source mode: %s", self._mode)
        if self._mode == "local":
            self.reload()

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def collection(self) -> Tuple[KnowledgeItem, ...]:
        return self._collection

    def reload(self) -> int:
        """Load the knowledge base from disk, replacing the current collection wholesale."""
        self._collection = tuple(self.store.load())
        return len(self._collection)

    def set_mode(self, mode: str) -> Dict[str, str]:
        normalized = (mode or "").strip().lower()
        if normalized == "github":
            normalized = "remote"
        if normalized not in MODES:
            raise InvalidModeError(f"Unknown knowledge source mode: {mode!r}")

        self._mode = normalized  # type: ignore[assignment]
        LOGGER.info("Knowledge source mode changed to: %s", self._mode)
        if self._mode == "local" and not self._collection:
            self.reload()
        if self._mode == "remote" and not self.config.github_token:
            LOGGER.warning("Switched to remote mode without a GitHub token")

        message = f"Knowledge source mode successfully set to '{self._mode}'."
        return {"status": "success", "message": message, "new_mode": self._mode}

    async def route(self, query_text: str, target_source: Optional[str] = None) -> QueryResponse:
        """Answer ``query_text`` from the backend selected by the current mode.

        The result list is never empty: misses and failures are reported as
        placeholder items whose kind starts with ``no_match`` or ``error``.
        """
        query_text = query_text.strip()
        if not query_text:
            raise ValueError("Query text cannot be empty")

        mode = self._mode
        target = resolve_target_source(query_text, target_source)
        if mode == "local":
            results, confidence = self._route_local(query_text, target)
        else:
            results, confidence = await self._route_remote(query_text, target)

        if not results:
            results.append(
                placeholder(
                    "no_match",
                    "Query Not Matched",
                    f"No information found for '{query_text}' in {mode} mode.",
                    mode,
                    ["no_match"],
                )
            )

        results = results[:MAX_RESULTS]
        return QueryResponse(
            query_text=query_text,
            results=results,
            confidence_score=confidence,
            mode_used=mode,
            summary=format_summary(query_text, results, mode),
            metadata={"target_source": target or "all"},
        )

    def _route_local(self, query_text: str, target: Optional[str]) -> Tuple[List[KnowledgeItem], float]:
        collection = self._collection
        LOGGER.info("Querying local knowledge base for %r (target: %s)", query_text, target or "all")
        if not collection:
            item = placeholder(
                "error_info",
                "Local Knowledge Base Empty",
                "Local knowledge base is empty. Build it with 'addondocs build-index'.",
                "Server Config",
                ["error", "kb"],
            )
            return [item], CONFIDENCE_PRIOR

        ranked = rank_items(query_text, collection, target_source=target)
        if ranked:
            return [result.item for result in ranked], CONFIDENCE_LOCAL_MATCH
        return [], CONFIDENCE_LOCAL_NO_MATCH

    async def _route_remote(self, query_text: str, target: Optional[str]) -> Tuple[List[KnowledgeItem], float]:
        try:
            outcome = await self.remote.search_items(query_text, target or "all")
        except Exception as exc:
            LOGGER.exception("Error during GitHub query processing")
            item = placeholder(
                "error_github",
                "GitHub Query Error",
                f"An error occurred: {exc}",
                "GitHub Service",
                ["error"],
            )
            return [item], CONFIDENCE_PRIOR

        if not outcome.refs:
            item = placeholder(
                "no_match_github",
                "No Files Found on GitHub",
                f"GitHub search found no direct file matches for '{query_text}'.",
                "GitHub API Search",
                ["error"],
            )
            return [item], CONFIDENCE_PRIOR

        if outcome.items:
            return list(outcome.items), CONFIDENCE_REMOTE_MATCH
        return [], CONFIDENCE_REMOTE_FILTERED

    def capabilities(self) -> Dict[str, Any]:
        keywords: List[str] = []
        if self._mode == "local" and self._collection:
            for item in self._collection:
                for tag in item.tags:
                    if tag not in keywords:
                        keywords.append(tag)
                if len(keywords) >= MAX_KEYWORDS:
                    break
        else:
            keywords = list(FALLBACK_KEYWORDS)

        if self._mode == "remote":
            source = "Live from GitHub (AdobeDocs & Adobe Spectrum Web Components)"
        else:
            source = f"Local knowledge base {self.store.index_path.name} (Express SDK & Spectrum Web Components)"

        return {
            "agent_name": AGENT_NAME,
            "description": AGENT_DESCRIPTION,
            "supported_keywords": keywords[:MAX_KEYWORDS],
            "documentation_source": source,
            "current_mode": self._mode,
            "available_modes": list(MODES),
        }

    async def code_sample(self, feature: str, language: Optional[str] = None) -> Optional[CodeSample]:
        return await self.remote.get_code_sample(feature, language)

    async def aclose(self) -> None:
        await self.remote.aclose()
