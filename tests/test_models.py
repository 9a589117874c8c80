"""Tests for core data models."""

from __future__ import annotations

import dataclasses

import pytest

from addondocs.models import Document, KnowledgeItem, SearchResultRef


class TestKnowledgeItem:
    """Test KnowledgeItem dataclass."""

    def test_create_item(self) -> None:
        """Should create KnowledgeItem with defaults for optional fields."""
        item = KnowledgeItem(
            kind="page_overview",
            title="Buttons - Overview",
            content="Intro text.",
            source_hint="https://example.com/buttons.md",
        )

        assert item.tags == ()
        assert item.data_source == "unknown"
        assert item.raw_markdown is None
        assert item.front_matter is None
        assert item.parent_title is None

    def test_item_is_immutable(self) -> None:
        """Should reject attribute assignment after construction."""
        item = KnowledgeItem(kind="k", title="t", content="c", source_hint="s")

        with pytest.raises(dataclasses.FrozenInstanceError):
            item.title = "other"  # type: ignore[misc]

    def test_to_dict_and_back(self) -> None:
        """Should serialize to a plain dict and rebuild an equal item."""
        item = KnowledgeItem(
            kind="class_method_detail",
            title="Buttons - press()",
            content="Does a thing.",
            source_hint="https://example.com",
            tags=("buttons", "press()"),
            data_source="express_sdk",
            raw_markdown="### press()\nDoes a thing.",
            front_matter={"title": "Buttons"},
            parent_title="Buttons",
        )

        record = item.to_dict()

        assert record["tags"] == ["buttons", "press()"]
        assert record["data_source"] == "express_sdk"
        assert KnowledgeItem.from_dict(record) == item

    def test_from_dict_accepts_legacy_keys(self) -> None:
        """Should read records written with the older key names."""
        record = {
            "type": "spectrum_component_overview",
            "title": "tabs",
            "content": "Tabs overview",
            "raw_markdown_content": "# Tabs",
            "source_hint": "https://github.com/adobe/spectrum-web-components",
            "tags": ["tabs"],
            "frontmatter": {},
            "parent_title": "tabs",
            "dataSource": "spectrum_web_components",
        }

        item = KnowledgeItem.from_dict(record)

        assert item.kind == "spectrum_component_overview"
        assert item.raw_markdown == "# Tabs"
        assert item.front_matter is None
        assert item.data_source == "spectrum_web_components"

    def test_from_dict_unknown_source(self) -> None:
        """Should map unrecognized data sources to unknown."""
        item = KnowledgeItem.from_dict(
            {"kind": "k", "title": "t", "content": "c", "data_source": "somewhere"}
        )

        assert item.data_source == "unknown"
        assert item.source_hint == ""

    def test_from_dict_scalar_tag(self) -> None:
        """Should keep a single string tag whole."""
        item = KnowledgeItem.from_dict({"kind": "k", "title": "t", "content": "c", "tags": "button"})

        assert item.tags == ("button",)

    def test_from_dict_missing_required(self) -> None:
        """Should raise KeyError when required fields are absent."""
        with pytest.raises(KeyError):
            KnowledgeItem.from_dict({"title": "t"})


class TestDocument:
    """Test Document dataclass."""

    def test_defaults(self) -> None:
        document = Document(path="README.md", front_matter={}, body="# Hi", data_source="express_sdk")

        assert document.corpus_base_path == ""
        assert document.source_hint == ""


class TestSearchResultRef:
    """Test SearchResultRef dataclass."""

    def test_default_score(self) -> None:
        ref = SearchResultRef(name="a.md", path="src/pages/a.md", sha="abc", corpus="express_sdk")

        assert ref.score == 0.0
