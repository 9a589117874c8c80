"""Core data models shared by the indexing and retrieval pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

DataSource = Literal["express_sdk", "spectrum_web_components", "code_sample", "unknown"]
Corpus = Literal["express_sdk", "spectrum_web_components"]
Mode = Literal["remote", "local"]

EXPRESS_SDK: Corpus = "express_sdk"
SPECTRUM: Corpus = "spectrum_web_components"
CORPORA: Tuple[Corpus, ...] = (EXPRESS_SDK, SPECTRUM)
DATA_SOURCES: Tuple[str, ...] = ("express_sdk", "spectrum_web_components", "code_sample", "unknown")

# Alternate keys written by earlier knowledge base builds.
_LEGACY_KEYS = {
    "type": "kind",
    "raw_markdown_content": "raw_markdown",
    "frontmatter": "front_matter",
    "dataSource": "data_source",
}


@dataclass(frozen=True, slots=True)
class KnowledgeItem:
    """One retrievable section of documentation."""

    kind: str
    title: str
    content: str
    source_hint: str
    tags: Tuple[str, ...] = ()
    data_source: str = "unknown"
    raw_markdown: Optional[str] = None
    front_matter: Optional[Dict[str, Any]] = None
    parent_title: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "title": self.title,
            "content": self.content,
            "raw_markdown": self.raw_markdown,
            "source_hint": self.source_hint,
            "tags": list(self.tags),
            "front_matter": self.front_matter,
            "parent_title": self.parent_title,
            "data_source": self.data_source,
        }

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "KnowledgeItem":
        """Build an item from a persisted record.

        Raises ``KeyError`` or ``TypeError`` for records missing required fields.
        """
        data = {_LEGACY_KEYS.get(key, key): value for key, value in record.items()}
        data_source = data.get("data_source") or "unknown"
        if data_source not in DATA_SOURCES:
            data_source = "unknown"
        front_matter = data.get("front_matter")
        tags = data.get("tags") or ()
        if isinstance(tags, str):
            tags = [tags]
        return cls(
            kind=str(data["kind"]),
            title=str(data["title"]),
            content=str(data["content"]),
            source_hint=str(data.get("source_hint") or ""),
            tags=tuple(str(tag) for tag in tags),
            data_source=data_source,
            raw_markdown=data.get("raw_markdown"),
            front_matter=dict(front_matter) if front_matter else None,
            parent_title=data.get("parent_title"),
        )


@dataclass(slots=True)
class Document:
    """A markdown source file split into front-matter and body."""

    path: str
    front_matter: Dict[str, Any]
    body: str
    data_source: Corpus
    corpus_base_path: str = ""
    source_hint: str = ""


@dataclass(slots=True)
class SearchResultRef:
    """A remote search hit, used only to schedule a content fetch."""

    name: str
    path: str
    sha: str
    corpus: Corpus
    score: float = 0.0
    html_url: str = ""


@dataclass(slots=True)
class CodeSample:
    """Code excerpt pulled from the add-on samples repository."""

    code: str
    language: str
    file_path: str
    source_hint: str
    feature: str
    framework: Optional[str] = None


@dataclass(slots=True)
class QueryResponse:
    """Structured answer returned by the query router."""

    query_text: str
    results: List[KnowledgeItem]
    confidence_score: float
    mode_used: Mode
    summary: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
