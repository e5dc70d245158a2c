"""
Unit tests for the free-text sanitizer.

Tests verify removal of angle brackets, javascript: schemes and inline
event handlers, trimming, and idempotence.
"""

import pytest

from src.domain.sanitizer import sanitize


class TestSanitizeExamples:
    """Tests for documented sanitizer behavior."""

    def test_script_tag_brackets_removed(self) -> None:
        """Angle brackets are stripped, nothing else rewritten."""
        assert sanitize("<script>alert(1)</script>") == "scriptalert(1)/script"

    def test_whitespace_trimmed_and_tags_flattened(self) -> None:
        """Outer whitespace trimmed, inner text kept."""
        assert sanitize("  hello <b>world</b>  ") == "hello bworld/b"

    def test_plain_text_unchanged(self) -> None:
        """Text without payloads is returned as-is."""
        assert sanitize("Buy milk & eggs (2x)") == "Buy milk & eggs (2x)"

    def test_empty_string(self) -> None:
        """Empty input yields empty output."""
        assert sanitize("") == ""

    def test_only_brackets_yields_empty(self) -> None:
        """Input made only of removable characters yields empty output."""
        assert sanitize(" <<>> ") == ""


class TestScriptScheme:
    """Tests for javascript: removal."""

    def test_scheme_removed(self) -> None:
        """javascript: prefix is removed."""
        assert sanitize("javascript:alert(1)") == "alert(1)"

    def test_scheme_case_insensitive(self) -> None:
        """Mixed-case scheme is removed."""
        assert sanitize("JaVaScRiPt:alert(1)") == "alert(1)"

    def test_nested_scheme_does_not_reassemble(self) -> None:
        """Removing an inner scheme cannot leave a new one behind."""
        assert sanitize("javajavascript:script:alert(1)") == "alert(1)"

    def test_scheme_split_by_brackets(self) -> None:
        """Brackets are removed before the scheme check."""
        assert sanitize("java<script:alert(1)") == "alert(1)"


class TestEventHandlers:
    """Tests for inline event handler removal."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ('img src=x onerror=alert(1)', "img src=x alert(1)"),
            ("a onclick=steal()", "a steal()"),
            ("ONMOUSEOVER=run()", "run()"),
            ("on_load_1=x", "x"),
        ],
    )
    def test_handler_removed(self, text: str, expected: str) -> None:
        """on<word>= sequences are removed regardless of case."""
        assert sanitize(text) == expected

    def test_nested_handler_does_not_reassemble(self) -> None:
        """Removing an inner handler cannot leave a new one behind."""
        assert sanitize("oonclick=nclick=x") == "x"

    def test_word_on_without_equals_kept(self) -> None:
        """Ordinary words starting with 'on' survive."""
        assert sanitize("only one online") == "only one online"

    def test_handler_removal_then_trim(self) -> None:
        """Whitespace exposed by removal is trimmed."""
        assert sanitize("onload= hello") == "hello"


class TestSanitizeProperties:
    """Property-style checks over a sample of hostile inputs."""

    SAMPLES = [
        "",
        "   ",
        "<script>alert(1)</script>",
        "  hello <b>world</b>  ",
        "<img src=x onerror=alert(1)>",
        "javajavascript:script:",
        "oonclick=nclick=",
        "<<a>>",
        "on<x>load=javascript:void(0)",
        "jav<>ascript:",
        " \t plain text \n",
        "ONLOAD=JAVASCRIPT:<>",
        "onon=load=",
    ]

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, text: str) -> None:
        """Sanitizing twice equals sanitizing once."""
        once = sanitize(text)
        assert sanitize(once) == once

    @pytest.mark.parametrize("text", SAMPLES)
    def test_no_angle_brackets(self, text: str) -> None:
        """Output never contains angle brackets."""
        cleaned = sanitize(text)
        assert "<" not in cleaned
        assert ">" not in cleaned

    @pytest.mark.parametrize("text", SAMPLES)
    def test_no_script_scheme(self, text: str) -> None:
        """Output never contains a javascript: scheme."""
        assert "javascript:" not in sanitize(text).lower()

    @pytest.mark.parametrize("text", SAMPLES)
    def test_trimmed(self, text: str) -> None:
        """Output has no leading or trailing whitespace."""
        cleaned = sanitize(text)
        assert cleaned == cleaned.strip()
