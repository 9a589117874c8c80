"""Batch build of the local knowledge base from cloned documentation repos."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Tuple

from addondocs.corpora import CorpusSpec
from addondocs.index.storage import KnowledgeBaseStore
from addondocs.ingestion.markdown_loader import load_document
from addondocs.ingestion.segmenter import segment_document
from addondocs.models import KnowledgeItem
from addondocs.utils.files import iter_markdown_paths

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexStats:
    indexed: int = 0
    skipped: int = 0
    failed: int = 0
    items: int = 0
    processed_files: list[Path] = field(default_factory=list)

    def increment(self, status: str, path: Path, items: int = 0) -> None:
        if status == "indexed":
            self.indexed += 1
            self.items += items
        elif status == "skipped":
            self.skipped += 1
        else:
            self.failed += 1
        self.processed_files.append(path)


class Indexer:
    """Walks corpus checkouts, segments every document and persists the result."""

    def __init__(self, store: KnowledgeBaseStore) -> None:
        self.store = store

    def collect(
        self, repo_root: Path, corpus: CorpusSpec, stats: IndexStats | None = None
    ) -> List[KnowledgeItem]:
        """Segment every content file of one corpus checkout."""
        stats = stats if stats is not None else IndexStats()
        scan_root = repo_root / corpus.search_path
        if not scan_root.is_dir():
            LOGGER.warning(
                "Documentation path for %s not found: %s (clone https://github.com/%s first)",
                corpus.name,
                scan_root,
                corpus.full_name,
            )
            return []

        LOGGER.info("Indexing %s documentation from %s", corpus.name, scan_root)
        items: List[KnowledgeItem] = []
        for path in iter_markdown_paths([scan_root]):
            try:
                document_items = segment_document(load_document(path, repo_root, corpus))
            except Exception as exc:
                LOGGER.error("Failed to process %s: %s", path, exc)
                stats.increment("failed", path)
                continue

            if not document_items:
                LOGGER.debug("No content extracted from %s", path)
                stats.increment("skipped", path)
                continue

            items.extend(document_items)
            stats.increment("indexed", path, len(document_items))
        return items

    def build(self, sources: Sequence[Tuple[CorpusSpec, Path]]) -> IndexStats:
        """Index every (corpus, checkout) pair and overwrite the stored knowledge base."""
        stats = IndexStats()
        items: List[KnowledgeItem] = []
        for corpus, repo_root in sources:
            items.extend(self.collect(Path(repo_root), corpus, stats))

        written = self.store.save(items)
        LOGGER.info("Wrote %d items to %s", written, self.store.index_path)
        return stats
