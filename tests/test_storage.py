"""Tests for KnowledgeBaseStore."""

from __future__ import annotations

import datetime as dt
import json
import logging
from pathlib import Path

import pytest

from addondocs.index.storage import KnowledgeBaseStore
from addondocs.models import KnowledgeItem


def make_item(title: str = "Buttons - Usage", **overrides) -> KnowledgeItem:
    fields = {
        "kind": "examples_section",
        "title": title,
        "content": "Usage\n\nHow to use.",
        "source_hint": "https://github.com/AdobeDocs/express-add-ons-docs/blob/main/src/pages/buttons.md",
        "tags": ("guides", "buttons"),
        "data_source": "express_sdk",
        "raw_markdown": "## Usage\nHow to use.",
        "front_matter": {"title": "Buttons"},
        "parent_title": "Buttons",
    }
    fields.update(overrides)
    return KnowledgeItem(**fields)


@pytest.fixture
def store(tmp_path: Path) -> KnowledgeBaseStore:
    return KnowledgeBaseStore(tmp_path / "data" / "knowledge_base.json")


class TestSave:
    """Test writing the knowledge base."""

    def test_creates_parent_directories(self, store: KnowledgeBaseStore) -> None:
        count = store.save([make_item()])

        assert count == 1
        assert store.exists()

    def test_writes_json_list(self, store: KnowledgeBaseStore) -> None:
        store.save([make_item(), make_item("Buttons - Methods")])

        records = json.loads(store.index_path.read_text(encoding="utf-8"))

        assert isinstance(records, list)
        assert [record["title"] for record in records] == ["Buttons - Usage", "Buttons - Methods"]
        assert records[0]["tags"] == ["guides", "buttons"]

    def test_overwrites_previous_content(self, store: KnowledgeBaseStore) -> None:
        store.save([make_item("One"), make_item("Two")])
        store.save([make_item("Three")])

        assert [item.title for item in store.load()] == ["Three"]

    def test_no_temporary_files_left(self, store: KnowledgeBaseStore) -> None:
        store.save([make_item()])

        assert [path.name for path in store.index_path.parent.iterdir()] == ["knowledge_base.json"]

    def test_dates_in_front_matter_serialized(self, store: KnowledgeBaseStore) -> None:
        """YAML dates should be written as strings instead of failing."""
        store.save([make_item(front_matter={"date": dt.date(2024, 1, 2)})])

        assert store.load()[0].front_matter == {"date": "2024-01-02"}

    def test_empty_collection(self, store: KnowledgeBaseStore) -> None:
        assert store.save([]) == 0
        assert store.load() == []


class TestLoad:
    """Test reading the knowledge base."""

    def test_round_trip(self, store: KnowledgeBaseStore) -> None:
        item = make_item()
        store.save([item])

        assert store.load() == [item]

    def test_missing_file(self, store: KnowledgeBaseStore, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            assert store.load() == []

        assert "not found" in caplog.text

    def test_corrupt_json(self, store: KnowledgeBaseStore, caplog: pytest.LogCaptureFixture) -> None:
        store.index_path.parent.mkdir(parents=True)
        store.index_path.write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            assert store.load() == []

        assert "Unable to read" in caplog.text

    def test_non_list_payload(self, store: KnowledgeBaseStore) -> None:
        store.index_path.parent.mkdir(parents=True)
        store.index_path.write_text('{"items": []}', encoding="utf-8")

        assert store.load() == []

    def test_record_missing_required_field(self, store: KnowledgeBaseStore) -> None:
        store.index_path.parent.mkdir(parents=True)
        store.index_path.write_text('[{"title": "No kind", "content": "x"}]', encoding="utf-8")

        assert store.load() == []

    def test_legacy_keys(self, store: KnowledgeBaseStore) -> None:
        """Should accept records written with the older field names."""
        record = {
            "type": "page_overview",
            "title": "Grids - Overview",
            "content": "Grid layouts.",
            "source_hint": "https://example.com/grids.md",
            "tags": ["grids"],
            "raw_markdown_content": "Grid layouts.",
            "frontmatter": {"title": "Grids"},
            "dataSource": "express_sdk",
        }
        store.index_path.parent.mkdir(parents=True)
        store.index_path.write_text(json.dumps([record]), encoding="utf-8")

        [item] = store.load()

        assert item.kind == "page_overview"
        assert item.raw_markdown == "Grid layouts."
        assert item.front_matter == {"title": "Grids"}
        assert item.data_source == "express_sdk"
        assert item.parent_title is None

    def test_unknown_data_source(self, store: KnowledgeBaseStore) -> None:
        record = {"kind": "x", "title": "t", "content": "c", "data_source": "somewhere"}
        store.index_path.parent.mkdir(parents=True)
        store.index_path.write_text(json.dumps([record]), encoding="utf-8")

        [item] = store.load()

        assert item.data_source == "unknown"
        assert item.source_hint == ""
        assert item.tags == ()
