"""
Unit tests for username normalization.
"""

import pytest

from src.utils.username import extract_username


class TestExtractUsername:
    """Test cases for extract_username."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("octocat", "octocat"),
            ("  octocat  ", "octocat"),
            ("https://github.com/octocat", "octocat"),
            ("https://github.com/octocat/", "octocat"),
            ("http://github.com/octocat/Hello-World", "octocat"),
            ("github.com/torvalds", "torvalds"),
            ("https://www.github.com/gvanrossum?tab=repositories", "gvanrossum?tab=repositories"),
        ],
    )
    def test_extracts_handle(self, raw, expected):
        """Handles and profile URLs normalize to the bare handle."""
        # Act
        result = extract_username(raw)

        # Assert
        assert result == expected

    def test_host_without_path_returns_empty(self):
        """The bare host yields no handle."""
        assert extract_username("https://github.com") == ""

    def test_host_with_trailing_slash_only_returns_empty(self):
        """Nothing after 'github.com/' yields an empty handle."""
        assert extract_username("https://github.com/") == ""

    def test_empty_and_whitespace_input(self):
        """Blank input normalizes to the empty string."""
        assert extract_username("") == ""
        assert extract_username("   ") == ""

    def test_input_without_host_is_only_trimmed(self):
        """Non-URL input is passed through unchanged apart from trimming."""
        assert extract_username(" gitlab.com/octocat ") == "gitlab.com/octocat"
