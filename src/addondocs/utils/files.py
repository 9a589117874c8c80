"""Utility helpers for working with documentation trees."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

MARKDOWN_SUFFIXES = (".md", ".mdx")
SKIPPED_DIRECTORIES = frozenset({"node_modules", ".git", ".github", "dist", ".vitepress", "images"})
SKIPPED_FILES = frozenset({"contributing.md", "changelog.md", "license.md"})


def is_content_file(path: Path) -> bool:
    """Return True for markdown files worth indexing."""
    name = path.name
    if path.suffix.lower() not in MARKDOWN_SUFFIXES:
        return False
    if name.startswith("_") or name.lower() in SKIPPED_FILES:
        return False
    return True


def iter_markdown_paths(inputs: Iterable[Path]) -> Iterator[Path]:
    """Yield markdown paths from input paths, descending into content directories."""
    for item in inputs:
        if item.is_dir():
            if item.name in SKIPPED_DIRECTORIES:
                continue
            yield from iter_markdown_paths(sorted(item.iterdir()))
        elif item.is_file() and is_content_file(item):
            yield item


def to_posix_relative(path: Path, base: Path) -> str:
    """Path of ``path`` relative to ``base`` with forward slashes."""
    return path.relative_to(base).as_posix()
