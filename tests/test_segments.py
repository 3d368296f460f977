"""Tests for pathtree.routing.segments — normalization and pattern parsing."""

import pytest

from pathtree.errors import ConfigurationError
from pathtree.routing.segments import (
    Literal,
    NamedFixed,
    Wildcard,
    format_segment,
    normalize_path,
    parse_pattern,
)


class TestNormalizePath:
    def test_leading_slash_optional(self) -> None:
        assert normalize_path("/a/b") == ["a", "b"]
        assert normalize_path("a/b") == ["a", "b"]

    def test_only_one_leading_slash_stripped(self) -> None:
        assert normalize_path("//a") == ["", "a"]

    def test_trailing_slash_keeps_empty_segment(self) -> None:
        assert normalize_path("/a/") == ["a", ""]

    def test_root(self) -> None:
        assert normalize_path("/") == [""]

    def test_sequence_passes_through(self) -> None:
        assert normalize_path(["a", "", "b"]) == ["a", "", "b"]
        assert normalize_path(("a", "b")) == ["a", "b"]

    def test_invalid_type(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid path"):
            normalize_path(42)  # type: ignore[arg-type]


class TestParsePattern:
    def test_literals(self) -> None:
        assert parse_pattern("/api/v1/users") == [
            Literal("api"),
            Literal("v1"),
            Literal("users"),
        ]

    def test_wildcard(self) -> None:
        assert parse_pattern("/wiki/{title}") == [Literal("wiki"), Wildcard("title")]

    def test_named_fixed(self) -> None:
        assert parse_pattern("/{domain:en.wikipedia.org}/wiki") == [
            NamedFixed("domain", "en.wikipedia.org"),
            Literal("wiki"),
        ]

    def test_trailing_slash(self) -> None:
        assert parse_pattern("/docs/") == [Literal("docs"), Literal("")]

    def test_sequence_input(self) -> None:
        assert parse_pattern(["a", "{b}"]) == [Literal("a"), Wildcard("b")]

    def test_empty_sequence(self) -> None:
        assert parse_pattern([]) == []

    def test_parsed_descriptors_pass_through(self) -> None:
        assert parse_pattern([Wildcard("x"), "y"]) == [Wildcard("x"), Literal("y")]

    def test_plus_modifier_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="modifiers are not supported"):
            parse_pattern("/files/{+path}")

    def test_slash_modifier_rejoined_and_rejected(self) -> None:
        """``{/rest}`` is split in two by the slash and must still be recognized."""
        with pytest.raises(ConfigurationError, match=r"\{/rest\}"):
            parse_pattern("/files/{/rest}")

    def test_malformed_capture_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Malformed capture"):
            parse_pattern("/users/{user-id}")

    def test_unclosed_capture_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Malformed capture"):
            parse_pattern("/users/{id")

    def test_empty_fixed_literal_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_pattern("/{lang:}")


class TestDescriptors:
    def test_frozen(self) -> None:
        seg = Literal("users")
        with pytest.raises(AttributeError):
            seg.text = "other"  # type: ignore[misc]

    def test_equality(self) -> None:
        assert Wildcard("x") == Wildcard("x")
        assert Wildcard("x") != Wildcard("y")
        assert NamedFixed("x", "a") != Literal("a")

    def test_format(self) -> None:
        assert format_segment(Literal("wiki")) == "wiki"
        assert format_segment(Wildcard("title")) == "{title}"
        assert format_segment(NamedFixed("lang", "en")) == "{lang:en}"
