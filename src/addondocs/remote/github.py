"""Live documentation search against the GitHub REST API.

Searches are scoped to the documentation folders of each corpus repository.
Matching files are fetched, decoded and run through the same segmenter used
for the local knowledge base.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from addondocs.config import AppConfig
from addondocs.corpora import CORPUS_SPECS, SAMPLES_BASE_PATH, SAMPLES_OWNER, SAMPLES_REPO, CorpusSpec
from addondocs.ingestion.markdown_loader import parse_document
from addondocs.ingestion.segmenter import segment_document
from addondocs.models import CORPORA, CodeSample, Document, KnowledgeItem, SearchResultRef
from addondocs.remote.samples import FEATURE_SAMPLES, extract_relevant_code
from addondocs.remote.schemas import ContentFile, SearchResponse
from addondocs.utils.text import split_terms

LOGGER = logging.getLogger(__name__)

PER_CORPUS_LIMIT_ALL = 2
PER_CORPUS_LIMIT_SINGLE = 5


def results_limit(target_source: str) -> int:
    """Per-corpus search size, which also caps how many files are fetched."""
    return PER_CORPUS_LIMIT_ALL if target_source == "all" else PER_CORPUS_LIMIT_SINGLE


def filter_by_terms(items: List[KnowledgeItem], query: str) -> List[KnowledgeItem]:
    """Keep items whose title or tags literally contain a query term."""
    terms = split_terms(query, min_length=3)
    kept = []
    for item in items:
        title = item.title.lower()
        if any(term in title or any(term in tag for tag in item.tags) for term in terms):
            kept.append(item)
    return kept


@dataclass(slots=True)
class RemoteSearchOutcome:
    refs: List[SearchResultRef] = field(default_factory=list)
    items: List[KnowledgeItem] = field(default_factory=list)


class GitHubDocClient:
    """Searches and fetches documentation files from GitHub."""

    def __init__(self, config: AppConfig, *, client: Optional[httpx.AsyncClient] = None) -> None:
        self.config = config
        self._client = client
        if not config.github_token:
            LOGGER.warning(
                "No GitHub token configured, requests are unauthenticated and heavily rate-limited"
            )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.api_url,
                timeout=self.config.request_timeout,
                follow_redirects=True,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.config.user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    async def _get_json(self, url: str, params: Optional[dict[str, Any]] = None) -> Optional[Any]:
        """GET ``url`` and decode its JSON body; None when the resource does not exist."""
        client = await self._get_client()
        response = await client.get(url, params=params, headers=self._headers())
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json()

    async def _search_corpus(self, corpus: CorpusSpec, query: str, per_page: int) -> List[SearchResultRef]:
        try:
            data = await self._get_json(
                "/search/code", params={"q": corpus.search_query(query), "per_page": per_page}
            )
            if data is None:
                return []
            response = SearchResponse.model_validate(data)
        except ValidationError as exc:
            LOGGER.error("Invalid GitHub search response for %s: %s", corpus.name, exc)
            return []
        except (httpx.HTTPError, ValueError) as exc:
            LOGGER.error("GitHub search for %s failed: %s", corpus.name, exc)
            return []

        return [
            SearchResultRef(
                name=item.name,
                path=item.path,
                sha=item.sha,
                corpus=corpus.name,
                score=item.score or 0.0,
                html_url=item.html_url,
            )
            for item in response.items
        ]

    async def search_files(self, query: str, target_source: str = "all") -> List[SearchResultRef]:
        """Search the targeted corpora concurrently and merge hits by relevance."""
        corpora = CORPORA if target_source == "all" else (target_source,)
        per_page = results_limit(target_source)
        LOGGER.info("Searching GitHub for %r in %s", query, target_source)

        batches = await asyncio.gather(
            *(self._search_corpus(CORPUS_SPECS[name], query, per_page) for name in corpora)
        )
        refs = [ref for batch in batches for ref in batch]
        refs.sort(key=lambda ref: ref.score or 0.0, reverse=True)
        return refs

    async def _get_content_file(self, owner: str, repo: str, path: str) -> Optional[ContentFile]:
        url = f"/repos/{owner}/{repo}/contents/{quote(path)}"
        try:
            data = await self._get_json(url)
            if data is None:
                LOGGER.warning("File not found at %s/%s:%s", owner, repo, path)
                return None
            return ContentFile.model_validate(data)
        except ValidationError as exc:
            LOGGER.error("%s in %s/%s did not return file content: %s", path, owner, repo, exc)
        except (httpx.HTTPError, ValueError) as exc:
            LOGGER.error("Error fetching %s from %s/%s: %s", path, owner, repo, exc)
        return None

    async def get_file_content(self, path: str, corpus: str) -> Optional[Document]:
        """Fetch one documentation file and split it into front-matter and body."""
        source = CORPUS_SPECS[corpus]
        LOGGER.debug("Fetching %s/%s", source.full_name, path)
        content_file = await self._get_content_file(source.owner, source.repo, path)
        if content_file is None:
            return None

        text = base64.b64decode(content_file.content).decode("utf-8", errors="replace")
        return parse_document(
            text,
            content_file.path,
            source,
            source_hint=content_file.html_url or source.blob_url(content_file.path),
        )

    async def search_items(self, query: str, target_source: str = "all") -> RemoteSearchOutcome:
        """Search, fetch and segment the best matching files for ``query``."""
        refs = await self.search_files(query, target_source)
        outcome = RemoteSearchOutcome(refs=refs)
        if not refs:
            return outcome

        items: List[KnowledgeItem] = []
        for ref in refs[: results_limit(target_source)]:
            document = await self.get_file_content(ref.path, ref.corpus)
            if document is not None:
                items.extend(segment_document(document))

        outcome.items = filter_by_terms(items, query)
        return outcome

    async def get_code_sample(self, feature: str, language: Optional[str] = None) -> Optional[CodeSample]:
        """Fetch the sample file mapped to ``feature`` and extract its relevant code."""
        sample = FEATURE_SAMPLES.get(feature)
        if sample is None:
            LOGGER.warning("No sample mapping found for feature %r", feature)
            return None

        file_path = f"{SAMPLES_BASE_PATH}/{sample.path}"
        LOGGER.info("Fetching code sample for %r from %s", feature, file_path)
        content_file = await self._get_content_file(SAMPLES_OWNER, SAMPLES_REPO, file_path)
        if content_file is None:
            return None

        source = base64.b64decode(content_file.content).decode("utf-8", errors="replace")
        return CodeSample(
            code=extract_relevant_code(source, feature),
            language=language or "javascript",
            file_path=file_path,
            source_hint=content_file.html_url or "",
            feature=feature,
            framework=sample.framework,
        )
