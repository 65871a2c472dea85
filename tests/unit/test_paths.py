"""Tests for install root path handling."""

from pathlib import Path

import pytest

from crext.extension.errors import UnsafePathError
from crext.extension.paths import join_under, safe_segment, sanitize_path_value


class TestSafeSegment:
    """Test path segment validation."""

    @pytest.mark.parametrize(
        "value", ["ext1", "1.0.0_r1", "en_US", "abc-def@x", "my..ext", "1.0.0_build..2"]
    )
    def test_accepts_plain_segments(self, value):
        """Plain names should pass unchanged."""
        assert safe_segment(value) == value

    @pytest.mark.parametrize(
        "value",
        ["", ".", "..", "../etc", "a/b", "a\\b", "/abs", "x\x00y"],
    )
    def test_rejects_unsafe_segments(self, value):
        """Traversal, separators and empty names should be rejected."""
        with pytest.raises(UnsafePathError):
            safe_segment(value)

    def test_unsafe_path_error_is_value_error(self):
        """UnsafePathError should be catchable as ValueError."""
        with pytest.raises(ValueError):
            safe_segment("..")


class TestJoinUnder:
    """Test joining under the install root."""

    def test_join(self):
        """Should join each segment under the root."""
        root = Path("/srv/extensions")
        assert join_under(root, "ext1", "1.0.0_r1") == root / "ext1" / "1.0.0_r1"

    def test_join_rejects_traversal(self):
        """Any unsafe segment should fail the whole join."""
        with pytest.raises(UnsafePathError):
            join_under(Path("/srv/extensions"), "ext1", "..", "manifest.json")


class TestSanitizePathValue:
    """Test sanitizing untrusted manifest values."""

    def test_keeps_locale(self):
        """A normal locale should pass through."""
        assert sanitize_path_value("pt_BR") == "pt_BR"

    def test_strips_separators(self):
        """Separators and dot runs should be removed."""
        cleaned = sanitize_path_value("../../etc/passwd")
        assert "/" not in cleaned
        assert ".." not in cleaned

    def test_parent_reference_becomes_empty(self):
        """A bare parent reference should collapse to empty."""
        assert sanitize_path_value("..") == ""

    def test_non_string(self):
        """Non-strings should give an empty string."""
        assert sanitize_path_value(None) == ""
        assert sanitize_path_value(42) == ""
