"""Markdown loading with YAML front-matter extraction."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from addondocs.corpora import CorpusSpec
from addondocs.models import Document
from addondocs.utils.files import to_posix_relative

LOGGER = logging.getLogger(__name__)

_FRONT_MATTER = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)


def split_front_matter(text: str) -> Tuple[Dict[str, Any], str]:
    """Separate a leading YAML front-matter block from the markdown body."""
    text = text.lstrip("\ufeff")
    match = _FRONT_MATTER.match(text)
    if not match:
        return {}, text

    body = text[match.end():]
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        LOGGER.warning("Ignoring malformed front-matter: %s", exc)
        return {}, body

    if not isinstance(data, dict):
        return {}, body
    return {str(key): value for key, value in data.items()}, body


def parse_document(
    text: str,
    repo_path: str,
    corpus: CorpusSpec,
    *,
    source_hint: str | None = None,
) -> Document:
    """Build a Document from raw file text located at ``repo_path`` in the corpus repo."""
    front_matter, body = split_front_matter(text)
    return Document(
        path=repo_path,
        front_matter=front_matter,
        body=body,
        data_source=corpus.name,
        corpus_base_path=corpus.tag_base_path,
        source_hint=source_hint if source_hint is not None else corpus.blob_url(repo_path),
    )


def load_document(path: Path, repo_root: Path, corpus: CorpusSpec) -> Document:
    """Read a markdown file from a local clone of the corpus repository."""
    text = path.read_text(encoding="utf-8", errors="replace")
    return parse_document(text, to_posix_relative(path, repo_root), corpus)
