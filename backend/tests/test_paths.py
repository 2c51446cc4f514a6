"""Tests for absolute-path classification and storage path resolution."""
from pathlib import Path

import pytest

from seminar_storage.presentations.paths import (
    is_absolute_path,
    normalize_separators,
    resolve_storage_path,
)


class TestIsAbsolutePath:
    """Classification must not depend on the host platform."""

    @pytest.mark.parametrize(
        "path",
        [
            "C:\\Users\\x\\file.pdf",
            "d:\\slides.pdf",
            "Z:/mixed/file.pdf",
            "\\\\server\\share\\file.pdf",
            "/home/x/file.pdf",
            "/",
        ],
    )
    def test_absolute(self, path):
        assert is_absolute_path(path) is True

    @pytest.mark.parametrize(
        "path",
        [
            "uploads/presentations/P-1/file.pdf",
            "uploads\\presentations\\P-1\\file.pdf",
            "file.pdf",
            "C:",
            "C:file.pdf",
            "1:\\file.pdf",
            "\\single\\backslash.pdf",
            "",
            None,
        ],
    )
    def test_not_absolute(self, path):
        assert is_absolute_path(path) is False


class TestNormalizeSeparators:
    def test_backslashes_become_forward_slashes(self):
        assert normalize_separators("a\\b/c\\d.pdf") == "a/b/c/d.pdf"


class TestResolveStoragePath:
    """Tests for resolve_storage_path."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_input_returns_none(self, tmp_path, value):
        assert resolve_storage_path(value, tmp_path) is None

    def test_resolves_onto_project_root(self, tmp_path):
        resolved = resolve_storage_path("uploads/presentations/P-1/deck.pdf", tmp_path)

        assert resolved.is_absolute()
        assert resolved == tmp_path / "uploads" / "presentations" / "P-1" / "deck.pdf"

    def test_backslash_input_matches_forward_slash_input(self, tmp_path):
        forward = resolve_storage_path("uploads/presentations/P-1/deck.pdf", tmp_path)
        backward = resolve_storage_path("uploads\\presentations\\P-1\\deck.pdf", tmp_path)
        assert forward == backward

    def test_target_need_not_exist(self, tmp_path):
        resolved = resolve_storage_path("uploads/presentations/ghost/none.pdf", tmp_path)
        assert resolved is not None
        assert not resolved.exists()

    def test_relative_project_root_is_made_absolute(self):
        resolved = resolve_storage_path("uploads/presentations/P-1/a.txt", Path("."))
        assert resolved.is_absolute()
        assert resolved == Path.cwd() / "uploads" / "presentations" / "P-1" / "a.txt"
