"""Tests for local term-frequency search."""

from __future__ import annotations

import pytest

from addondocs.index.search import (
    MAX_RESULTS,
    Searcher,
    normalize_target_hint,
    rank_items,
    resolve_target_source,
    score_item,
)
from addondocs.models import KnowledgeItem


def make_item(
    title: str,
    *,
    content: str = "",
    tags: tuple[str, ...] = (),
    data_source: str = "express_sdk",
    parent_title: str | None = None,
) -> KnowledgeItem:
    return KnowledgeItem(
        kind="documentation_page",
        title=title,
        content=content,
        source_hint=f"https://example.com/{title}",
        tags=tags,
        data_source=data_source,
        parent_title=parent_title,
    )


class TestScoreItem:
    """Test score_item weighting."""

    def test_title_tag_and_content_weights(self) -> None:
        item = make_item("Button", content="Click handling...", tags=("button", "spectrum"))

        results = rank_items("spectrum button click", [item])

        assert len(results) == 1
        assert results[0].score == 8

    def test_parent_title_bonus(self) -> None:
        item = make_item("Dialogs - Usage", content="usage", parent_title="Modal Dialogs")

        assert score_item(item, ["dialogs"], "dialogs") == 3 + 1
        assert score_item(item, ["modal"], "modal") == 1

    def test_target_source_bonus(self) -> None:
        item = make_item("Tabs", data_source="spectrum_web_components")

        assert score_item(item, ["tabs"], "tabs", "spectrum_web_components") == 4
        assert score_item(item, ["tabs"], "tabs", "express_sdk") == 3

    def test_tag_substring_counts_once(self) -> None:
        item = make_item("Other", tags=("action-button", "button-group"))

        assert score_item(item, ["button"], "button") == 2

    def test_no_match(self) -> None:
        assert score_item(make_item("Grids", content="layout"), ["tabs"], "tabs") == 0


class TestRankItems:
    """Test rank_items ordering and limits."""

    def test_sorted_by_score_descending(self) -> None:
        weak = make_item("Other", content="dialog")
        strong = make_item("Dialog", content="dialog", tags=("dialog",))

        results = rank_items("dialog", [weak, strong])

        assert [result.item for result in results] == [strong, weak]
        assert [result.score for result in results] == [6, 1]

    def test_ties_keep_collection_order(self) -> None:
        items = [make_item(f"Dialog {n}") for n in range(3)]

        results = rank_items("dialog", items)

        assert [result.item.title for result in results] == ["Dialog 0", "Dialog 1", "Dialog 2"]

    def test_zero_scores_excluded(self) -> None:
        results = rank_items("tabs", [make_item("Grids"), make_item("Tabs")])

        assert [result.item.title for result in results] == ["Tabs"]

    def test_truncated_to_maximum(self) -> None:
        items = [make_item(f"Dialog {n}") for n in range(25)]

        assert len(rank_items("dialog", items, top_k=50)) == MAX_RESULTS
        assert len(rank_items("dialog", items, top_k=3)) == 3

    def test_short_terms_ignored(self) -> None:
        """Single character terms should not match everything."""
        assert rank_items("a", [make_item("Apple", content="a")]) == []

    def test_empty_collection(self) -> None:
        assert rank_items("dialog", []) == []

    def test_deterministic(self) -> None:
        items = [make_item("Dialog", content="dialog api"), make_item("API", content="dialog")]

        first = [result.item for result in rank_items("dialog api", items)]
        second = [result.item for result in rank_items("dialog api", items)]

        assert first == second


class TestResolveTargetSource:
    """Test target source resolution from hints and query text."""

    @pytest.mark.parametrize(
        ("query", "hint", "expected"),
        [
            ("how do tabs work", None, None),
            ("spectrum tabs", None, "spectrum_web_components"),
            ("sp-button variants", None, "spectrum_web_components"),
            ("express dialog", None, "express_sdk"),
            ("addon manifest", None, "express_sdk"),
            ("spectrum in express", None, "spectrum_web_components"),
            ("spectrum tabs", "express_sdk", "express_sdk"),
            ("tabs", "component-library", "spectrum_web_components"),
            ("tabs", "sdk", "express_sdk"),
            ("spectrum tabs", "all", None),
            ("spectrum tabs", "  ", "spectrum_web_components"),
        ],
    )
    def test_resolution(self, query: str, hint: str | None, expected: str | None) -> None:
        assert resolve_target_source(query, hint) == expected

    def test_unknown_hint(self) -> None:
        with pytest.raises(ValueError, match="Unknown target source"):
            normalize_target_hint("docs")

    def test_hint_case_insensitive(self) -> None:
        assert normalize_target_hint("Express_SDK") == "express_sdk"


class TestSearcher:
    """Test the Searcher wrapper."""

    def test_applies_detected_target(self) -> None:
        express = make_item("Tabs", data_source="express_sdk")
        spectrum = make_item("Tabs", data_source="spectrum_web_components")

        results = Searcher([express, spectrum]).search("spectrum tabs")

        assert results[0].item is spectrum
        assert results[0].score == 4
        assert results[1].score == 3

    def test_target_is_a_boost_not_a_filter(self) -> None:
        express = make_item("Tabs", data_source="express_sdk")

        results = Searcher([express]).search("tabs", target_source="spectrum_web_components")

        assert [result.item for result in results] == [express]
