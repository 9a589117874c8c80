"""JSON persistence for the flattened knowledge item collection."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Sequence

from addondocs.models import KnowledgeItem

LOGGER = logging.getLogger(__name__)


class KnowledgeBaseStore:
    """Reads and writes the knowledge base file."""

    def __init__(self, index_path: Path) -> None:
        self.index_path = Path(index_path)

    def exists(self) -> bool:
        return self.index_path.is_file()

    def save(self, items: Sequence[KnowledgeItem]) -> int:
        """Replace the knowledge base with ``items``.

        The file is written next to the target and moved into place, so readers
        never observe a partially written index.
        """
        self.index_path.parent.mkdir(parents=True, exist_ok=True)
        payload = [item.to_dict() for item in items]
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.index_path.name}.", suffix=".tmp", dir=self.index_path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, ensure_ascii=False, indent=2, default=str)
            os.replace(tmp_name, self.index_path)
        except Exception:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return len(payload)

    def load(self) -> List[KnowledgeItem]:
        """Load all items, returning an empty list when the file is missing or unusable."""
        if not self.exists():
            LOGGER.warning("Knowledge base not found at %s, local collection is empty", self.index_path)
            return []

        try:
            with self.index_path.open("r", encoding="utf-8") as handle:
                records = json.load(handle)
        except (OSError, ValueError) as exc:
            LOGGER.error("Unable to read knowledge base %s: %s", self.index_path, exc)
            return []

        if not isinstance(records, list):
            LOGGER.error("Knowledge base %s is not a list of items", self.index_path)
            return []

        try:
            items = [KnowledgeItem.from_dict(record) for record in records]
        except (KeyError, TypeError, AttributeError) as exc:
            LOGGER.error("Malformed record in knowledge base %s: %s", self.index_path, exc)
            return []

        LOGGER.info("Loaded %d items from %s", len(items), self.index_path)
        return items
