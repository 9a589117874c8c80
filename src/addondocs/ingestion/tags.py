"""Topical tag derivation from documentation paths."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any, Iterable, List

STRUCTURAL_TAGS = frozenset({"", "src", "pages", "index"})
COMPONENT_STRUCTURAL_DIRS = frozenset({"packages", "stories", "src", "docs", "test"})


def clean_tags(tags: Iterable[Any]) -> List[str]:
    """Lowercase, de-duplicate and drop structural or private tags."""
    cleaned: List[str] = []
    for tag in tags:
        if tag is None:
            continue
        value = str(tag).strip().lower()
        if value in STRUCTURAL_TAGS or value.startswith("_") or value in cleaned:
            continue
        cleaned.append(value)
    return cleaned


def extract_tags(relative_path: str, data_source: str) -> List[str]:
    """Derive tags for a document from its path inside the corpus.

    Paths of the Spectrum corpus are relative to the repository root
    (``packages/<component>/...``); Express SDK paths are relative to
    ``src/pages``.
    """
    path = PurePosixPath(relative_path.replace("\\", "/").strip("/"))
    directories = [part.lower() for part in path.parts[:-1]]
    filename = path.stem.lower()

    if data_source == "spectrum_web_components":
        tags = _component_tags(directories, filename)
    else:
        tags = directories + ([] if filename == "index" else [filename])
    return clean_tags(tags)


def _component_tags(directories: List[str], filename: str) -> List[str]:
    in_package = len(directories) >= 2 and directories[0] == "packages"
    if filename == "readme" and in_package and len(directories) == 2:
        return [directories[1]]

    tags = [part for part in directories if part not in COMPONENT_STRUCTURAL_DIRS]
    if in_package and directories[1] not in tags:
        tags.insert(0, directories[1])
    if filename not in ("index", "readme") and filename not in tags:
        tags.append(filename)
    return tags
