"""Tests for file utility functions."""

from __future__ import annotations

from pathlib import Path

from addondocs.utils.files import is_content_file, iter_markdown_paths, to_posix_relative


class TestIsContentFile:
    """Test is_content_file function."""

    def test_markdown_extensions(self) -> None:
        assert is_content_file(Path("guide.md"))
        assert is_content_file(Path("guide.mdx"))
        assert is_content_file(Path("GUIDE.MD"))

    def test_other_extensions(self) -> None:
        assert not is_content_file(Path("guide.txt"))
        assert not is_content_file(Path("guide"))

    def test_blacklisted_names(self) -> None:
        """Should skip private partials and repository housekeeping files."""
        assert not is_content_file(Path("_partial.md"))
        assert not is_content_file(Path("CHANGELOG.md"))
        assert not is_content_file(Path("Contributing.md"))
        assert not is_content_file(Path("LICENSE.md"))


class TestIterMarkdownPaths:
    """Test iter_markdown_paths function."""

    def test_single_file(self, tmp_path: Path) -> None:
        doc = tmp_path / "doc.md"
        doc.write_text("# Doc")

        assert list(iter_markdown_paths([doc])) == [doc]

    def test_nested_directories(self, tmp_path: Path) -> None:
        """Should find markdown files in nested directories, sorted."""
        nested = tmp_path / "guides" / "develop"
        nested.mkdir(parents=True)
        (tmp_path / "b.md").write_text("b")
        (tmp_path / "a.mdx").write_text("a")
        (nested / "deep.md").write_text("deep")
        (nested / "notes.txt").write_text("text")

        paths = list(iter_markdown_paths([tmp_path]))

        assert [p.name for p in paths] == ["a.mdx", "b.md", "deep.md"]

    def test_skips_non_content_directories(self, tmp_path: Path) -> None:
        for name in ("node_modules", ".git", "dist", "images"):
            skipped = tmp_path / name
            skipped.mkdir()
            (skipped / "inside.md").write_text("skip me")
        (tmp_path / "kept.md").write_text("keep")

        paths = list(iter_markdown_paths([tmp_path]))

        assert [p.name for p in paths] == ["kept.md"]

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert list(iter_markdown_paths([tmp_path])) == []

    def test_nonexistent_path(self, tmp_path: Path) -> None:
        assert list(iter_markdown_paths([tmp_path / "missing"])) == []


class TestToPosixRelative:
    """Test to_posix_relative function."""

    def test_relative_path(self, tmp_path: Path) -> None:
        target = tmp_path / "src" / "pages" / "index.md"

        assert to_posix_relative(target, tmp_path) == "src/pages/index.md"
