"""Feature to sample mapping and code excerpt extraction for add-on samples."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

CONTEXT_BEFORE = 5
CONTEXT_AFTER = 2
FALLBACK_LINES = 50

_BLOCK_STARTERS = ("function", "=>", "const", "async")
_COMPONENT = re.compile(r"function\s+([A-Z][A-Za-z0-9]*)\s*\(")


@dataclass(frozen=True, slots=True)
class SampleLocation:
    path: str
    framework: str
    keywords: Tuple[str, ...]


FEATURE_SAMPLES: Dict[str, SampleLocation] = {
    "dialog-api": SampleLocation(
        "dialog-add-on/src/components/App.jsx",
        "react",
        ("showModalDialog", "dialog", "alert", "confirm"),
    ),
    "export-assets": SampleLocation(
        "export-assets-from-document/src/components/ExportContainer.jsx",
        "react",
        ("createRenditions", "export", "download"),
    ),
    "import-local-images": SampleLocation(
        "import-images-from-local/src/index.js",
        "vanilla",
        ("addImage", "importImage", "fileInput"),
    ),
    "drag-and-drop": SampleLocation(
        "import-images-from-local/src/index.js",
        "vanilla",
        ("enableDragToDocument", "dragstart", "dragend"),
    ),
    "oauth-authentication": SampleLocation(
        "import-images-using-oauth/src/components/Assets.jsx",
        "react",
        ("oauth", "authorize", "accessToken"),
    ),
    "client-storage": SampleLocation(
        "use-client-storage/src/index.ts",
        "vanilla",
        ("clientStorage", "setItem", "getItem"),
    ),
    "add-image-to-document": SampleLocation(
        "import-images-from-local/src/index.js",
        "vanilla",
        ("addImage", "document.addImage"),
    ),
}


def _brace_delta(line: str) -> int:
    return line.count("{") - line.count("}")


def _capture_block(lines: List[str], start: int) -> Optional[int]:
    """Index of the line closing the brace block opened at ``start``."""
    depth = 0
    for index in range(start, len(lines)):
        depth += _brace_delta(lines[index])
        if depth == 0 and "}" in lines[index]:
            return index
    return None


def _fallback_excerpt(source: str, lines: List[str]) -> str:
    imports: List[str] = []
    for line in lines:
        if line.startswith("import"):
            imports.append(line)
        elif imports and not line.strip():
            break

    match = _COMPONENT.search(source)
    if match:
        start = source.count("\n", 0, match.start())
        end = _capture_block(lines, start)
        component = lines[start : (end + 1 if end is not None else len(lines))]
        header = "\n".join(imports) + "\n\n" if imports else ""
        return header + "\n".join(component)

    return "\n".join(lines[:FALLBACK_LINES])


def extract_relevant_code(source: str, feature: str) -> str:
    """Pick the part of ``source`` most relevant to ``feature``.

    Looks for the first block-opening line mentioning one of the feature's
    keywords and returns it with a few lines of surrounding context. Files
    without such a line fall back to their imports plus main component, or
    to the head of the file.
    """
    sample = FEATURE_SAMPLES.get(feature)
    if sample is None:
        return source

    lines = source.split("\n")
    keywords = [keyword.lower() for keyword in sample.keywords]
    for index, line in enumerate(lines):
        lowered = line.lower()
        if not any(keyword in lowered for keyword in keywords):
            continue
        if not any(starter in line for starter in _BLOCK_STARTERS):
            continue

        end = _capture_block(lines, index)
        before = lines[max(0, index - CONTEXT_BEFORE) : index]
        if end is None:
            excerpt = before + lines[index:]
        else:
            excerpt = before + lines[index : end + 1] + lines[end + 1 : end + 1 + CONTEXT_AFTER]
        code = "\n".join(excerpt)
        if code.strip():
            return code

    return _fallback_excerpt(source, lines)
