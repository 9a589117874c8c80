"""Markdown block parsing and plain-text rendering helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

_MARKDOWN = MarkdownIt("commonmark").enable("table")

_BLANK_RUN = re.compile(r"\n\s*\n")
# Line breaks as markdown-it counts them for block maps.
_SOURCE_LINE = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+\Z")


@dataclass(slots=True)
class MarkdownBlock:
    """A top-level markdown block and the source text it was parsed from."""

    node: SyntaxTreeNode
    raw: str

    @property
    def type(self) -> str:
        return self.node.type

    @property
    def heading_level(self) -> int:
        if self.node.type != "heading":
            return 0
        return int(self.node.tag[1:])

    @property
    def heading_text(self) -> str:
        if self.node.type != "heading" or not self.node.children:
            return ""
        return self.node.children[0].content.strip()


def parse_blocks(markdown: str) -> List[MarkdownBlock]:
    """Split markdown into ordered top-level blocks.

    Each block keeps the raw source lines from its first line up to the next
    block, so joining the ``raw`` of consecutive blocks reproduces the input.
    """
    if not markdown or not markdown.strip():
        return []

    lines = _SOURCE_LINE.findall(markdown)
    nodes = SyntaxTreeNode(_MARKDOWN.parse(markdown)).children
    starts = [node.map[0] if node.map else 0 for node in nodes]

    blocks: List[MarkdownBlock] = []
    for index, node in enumerate(nodes):
        end = starts[index + 1] if index + 1 < len(nodes) else len(lines)
        blocks.append(MarkdownBlock(node=node, raw="".join(lines[starts[index] : end])))
    return blocks


def blocks_to_markdown(blocks: Iterable[MarkdownBlock]) -> str:
    return "".join(block.raw for block in blocks)


def render_plain_text(blocks: Sequence[MarkdownBlock]) -> str:
    """Render markdown blocks as readable plain text without markup.

    Entity references in prose come out decoded by the parser; code content
    is kept exactly as written.
    """
    if not blocks:
        return ""
    text = "".join(_render_block(block.node) for block in blocks)
    return _BLANK_RUN.sub("\n\n", text).strip()


def split_terms(text: str, *, min_length: int = 2) -> List[str]:
    """Lowercase ``text`` and split it into whitespace separated terms."""
    return [term for term in text.lower().split() if len(term) >= min_length]


def _render_inline(node: SyntaxTreeNode) -> str:
    parts: List[str] = []
    for child in node.children:
        kind = child.type
        if kind in ("text", "code_inline"):
            parts.append(child.content)
        elif kind in ("softbreak", "hardbreak"):
            parts.append("\n")
        elif kind == "html_inline":
            continue
        elif kind == "image":
            alt = _render_inline(child) or child.content
            parts.append(f"[Image: {alt}]")
        elif child.children:
            # link, strong, em and friends unwrap to their text
            parts.append(_render_inline(child))
        else:
            parts.append(child.content)
    return "".join(parts)


def _inline_text(node: SyntaxTreeNode) -> str:
    return "".join(_render_inline(child) for child in node.children if child.type == "inline")


def _render_list_item(item: SyntaxTreeNode) -> str:
    parts: List[str] = []
    for child in item.children:
        if child.type == "paragraph":
            parts.append(_inline_text(child))
        else:
            parts.append(_render_block(child).strip("\n"))
    body = "\n".join(part for part in parts if part)
    return f"- {body}\n"


def _render_table(table: SyntaxTreeNode) -> str:
    rows: List[str] = []
    for section in table.children:
        for row in section.children:
            rows.append(" | ".join(_inline_text(cell) for cell in row.children))
    return "\n".join(rows) + "\n\n"


def _render_block(node: SyntaxTreeNode) -> str:
    kind = node.type
    if kind in ("heading", "paragraph"):
        return _inline_text(node) + "\n\n"
    if kind in ("bullet_list", "ordered_list"):
        return "".join(_render_list_item(item) for item in node.children) + "\n"
    if kind in ("fence", "code_block"):
        info = (node.info or "").strip()
        language = info.split()[0] if info else "unknown"
        code = node.content.rstrip("\n")
        return f"\n[Code Block ({language})]:\n{code}\n\n"
    if kind == "blockquote":
        quote = "".join(_render_block(child) for child in node.children).strip()
        return f"> {quote}\n\n"
    if kind == "html_block":
        return ""
    if kind == "hr":
        return "\n---\n"
    if kind == "table":
        return _render_table(node)
    if node.children:
        return "".join(_render_block(child) for child in node.children)
    return node.content
