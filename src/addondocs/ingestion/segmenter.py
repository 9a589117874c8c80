"""Heading-based segmentation of markdown documents into knowledge items.

A document is split on its level-2 and level-3 headings. Everything before
the first level-2 heading becomes a ``page_overview`` item and every heading
span after it becomes its own item, classified from the heading text.
Index pages, component READMEs and documents without level-2 headings are
kept whole.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional, Sequence

from addondocs.ingestion.tags import clean_tags, extract_tags
from addondocs.models import Document, KnowledgeItem
from addondocs.utils.text import MarkdownBlock, blocks_to_markdown, parse_blocks, render_plain_text

_GROUP_KINDS = (
    (re.compile(r"\b(methods?|functions?)\b", re.IGNORECASE), "class_methods_group"),
    (re.compile(r"\b(properties?|attributes?|fields?|api)\b", re.IGNORECASE), "class_properties_group"),
    (re.compile(r"\b(events?)\b", re.IGNORECASE), "class_events_group"),
    (re.compile(r"\b(example?s|usage)\b", re.IGNORECASE), "examples_section"),
)
_CALL_SIGNATURE = re.compile(r"\w+\s*\(.*\)")
_IDENTIFIER = re.compile(r"[A-Za-z_][\w.]*(\s*:.*)?")


def classify_heading(text: str, level: int) -> str:
    """Kind of the section introduced by a level-2 or level-3 heading."""
    if level == 2:
        for pattern, kind in _GROUP_KINDS:
            if pattern.search(text):
                return kind
        return "major_section"
    if _CALL_SIGNATURE.search(text):
        return "class_method_detail"
    if _IDENTIFIER.fullmatch(text.strip()):
        return "class_property_detail"
    return "minor_section"


def heading_tags(text: str) -> List[str]:
    return [word for word in text.lower().split() if len(word) > 1 and "`" not in word]


def path_within_corpus(document: Document) -> str:
    base = document.corpus_base_path.strip("/")
    path = document.path.replace("\\", "/").lstrip("/")
    if base and path.startswith(base + "/"):
        return path[len(base) + 1 :]
    return path


def document_title(document: Document) -> str:
    front_matter = document.front_matter
    title = front_matter.get("title") or front_matter.get("name")
    if title:
        return str(title)

    path = PurePosixPath(document.path.replace("\\", "/"))
    if _is_component_readme(document) and path.parent.name:
        return path.parent.name
    return path.stem


def document_tags(document: Document) -> List[str]:
    declared = document.front_matter.get("tags")
    if declared:
        if isinstance(declared, (list, tuple, set)):
            return clean_tags(declared)
        return clean_tags([declared])
    return extract_tags(path_within_corpus(document), document.data_source)


def _is_component_readme(document: Document) -> bool:
    name = PurePosixPath(document.path.replace("\\", "/")).name.lower()
    return document.data_source == "spectrum_web_components" and name == "readme.md"


def _is_index(document: Document) -> bool:
    return PurePosixPath(document.path.replace("\\", "/")).stem.lower() == "index"


class _ItemFactory:
    """Builds items that share a document's title, source and metadata."""

    def __init__(self, document: Document, title: str, tags: List[str]) -> None:
        self.document = document
        self.base_title = title
        self.base_tags = tags
        self.front_matter: Optional[Dict[str, Any]] = dict(document.front_matter) or None

    def build(
        self,
        kind: str,
        title: str,
        blocks: Sequence[MarkdownBlock],
        *,
        extra_tags: Sequence[str] = (),
        raw_markdown: Optional[str] = None,
    ) -> Optional[KnowledgeItem]:
        content = render_plain_text(blocks)
        if not content.strip():
            return None
        return KnowledgeItem(
            kind=kind,
            title=title,
            content=content,
            source_hint=self.document.source_hint,
            tags=tuple(clean_tags([*self.base_tags, *extra_tags])),
            data_source=self.document.data_source,
            raw_markdown=raw_markdown if raw_markdown is not None else blocks_to_markdown(blocks),
            front_matter=self.front_matter,
            parent_title=self.base_title,
        )


def segment_document(document: Document) -> List[KnowledgeItem]:
    """Split one document into knowledge items, dropping empty sections."""
    blocks = parse_blocks(document.body)
    if not blocks:
        return []

    base_title = document_title(document)
    factory = _ItemFactory(document, base_title, document_tags(document))
    declared_kind = document.front_matter.get("type")
    declared_kind = str(declared_kind) if declared_kind else None

    first_h2 = next((i for i, block in enumerate(blocks) if block.heading_level == 2), None)
    component_readme = _is_component_readme(document)

    if first_h2 is None or _is_index(document) or component_readme:
        if _is_index(document):
            kind = "category_overview"
        elif component_readme:
            kind = "spectrum_component_overview"
        else:
            kind = "documentation_page"
        item = factory.build(declared_kind or kind, base_title, blocks, raw_markdown=document.body)
        return [item] if item else []

    items: List[KnowledgeItem] = []
    overview = factory.build(
        declared_kind or "page_overview",
        f"{base_title} - Overview",
        blocks[:first_h2],
        extra_tags=["overview"],
    )
    if overview:
        items.append(overview)

    for heading, span in _heading_spans(blocks[first_h2:]):
        section_title = heading.heading_text.replace("`", "")
        if not section_title:
            continue
        item = factory.build(
            classify_heading(section_title, heading.heading_level),
            f"{base_title} - {section_title}",
            span,
            extra_tags=heading_tags(heading.heading_text),
        )
        if item:
            items.append(item)

    if not items:
        fallback = factory.build(
            declared_kind or "documentation_page", base_title, blocks, raw_markdown=document.body
        )
        if fallback:
            items.append(fallback)
    return items


def _heading_spans(blocks: Sequence[MarkdownBlock]) -> List[tuple[MarkdownBlock, List[MarkdownBlock]]]:
    """Group blocks into (heading, blocks) spans split on level-2/3 headings."""
    spans: List[tuple[MarkdownBlock, List[MarkdownBlock]]] = []
    for block in blocks:
        if block.heading_level in (2, 3):
            spans.append((block, [block]))
        elif spans:
            spans[-1][1].append(block)
    return spans
