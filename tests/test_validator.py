"""Tests for snippet key validation."""

from __future__ import annotations

import pytest

from insertive.features.validator import validate_key


class TestValidateKey:
    @pytest.mark.parametrize("key", ["hello", "email-intro", "snake_case", "A1", "-", "_x_"])
    def test_valid_keys(self, key: str) -> None:
        result = validate_key(key)
        assert result.valid
        assert result.reason == ""
        assert result.message == ""

    @pytest.mark.parametrize("key", ["", "   ", None, "\t"])
    def test_empty_key(self, key: str | None) -> None:
        result = validate_key(key)
        assert not result.valid
        assert result.reason == "empty key"

    def test_space_is_reported_before_characters(self) -> None:
        result = validate_key("my snippet!")
        assert result.reason == "contains space"
        assert "spaces" in result.message

    def test_leading_space_is_a_space_not_empty(self) -> None:
        assert validate_key(" abc").reason == "contains space"

    @pytest.mark.parametrize("key", ["a.b", "café", "key\n", "tab\tbed", "{1}", "a/b"])
    def test_invalid_characters(self, key: str) -> None:
        result = validate_key(key)
        assert not result.valid
        assert result.reason == "invalid characters"
        assert "letters, numbers, hyphens, and underscores" in result.message

    def test_result_is_truthy_only_when_valid(self) -> None:
        assert validate_key("ok")
        assert not validate_key("not ok")
