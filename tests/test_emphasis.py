"""Tests for emphasis completion (``***``, ``**``, ``__``, ``*``, ``_``)."""

import pytest

from remiendo import heal
from remiendo.handlers.builtins import (
    BoldHandler,
    BoldItalicHandler,
    DoubleUnderscoreHandler,
    SingleAsteriskHandler,
    SingleUnderscoreHandler,
    emphasis,
)


class TestBold:
    """``**`` completion."""

    def test_closes_bold(self) -> None:
        assert heal("Text with **bold") == "Text with **bold**"

    def test_half_typed_closer(self) -> None:
        """``**xxx*`` gets one asterisk, not two."""
        assert heal("**xxx*") == "**xxx**"

    def test_complete_bold_unchanged(self) -> None:
        assert heal("**bold** text") == "**bold** text"

    @pytest.mark.parametrize("text", ["**", "Text ending with **", "** ", "**  \n"])
    def test_no_content_after_marker(self, text: str) -> None:
        assert BoldHandler().handle(text) == text

    def test_bold_closes_around_italic(self) -> None:
        assert heal("**a *b*") == "**a *b***"

    def test_marker_inside_inline_code_not_counted(self) -> None:
        assert heal("use `**kwargs` here") == "use `**kwargs` here"

    def test_marker_inside_fence_not_counted(self) -> None:
        text = "```\n**not bold\n```"
        assert heal(text) == text

    def test_list_item_spanning_lines_left_open(self) -> None:
        """A bare list item does not carry bold across lines."""
        text = "- **item\ncontinued"
        assert BoldHandler().handle(text) == text

    def test_list_item_single_line_closed(self) -> None:
        assert heal("- **item") == "- **item**"


class TestBoldItalic:
    """``***`` completion."""

    def test_closes_bold_italic(self) -> None:
        assert heal("***incomplete") == "***incomplete***"

    def test_after_complete_emphasis(self) -> None:
        assert heal("*italic* **bold** ***both") == "*italic* **bold** ***both***"

    def test_balanced_unchanged(self) -> None:
        assert heal("***first*** and ***second***") == "***first*** and ***second***"

    @pytest.mark.parametrize("text", ["****", "*****", "******"])
    def test_only_asterisks_unchanged(self, text: str) -> None:
        assert heal(text) == text

    def test_no_content_unchanged(self) -> None:
        assert BoldItalicHandler().handle("text ***") == "text ***"


class TestDoubleUnderscore:
    """``__`` completion."""

    def test_closes_double_underscore(self) -> None:
        assert heal("__text") == "__text__"

    def test_half_typed_closer(self) -> None:
        assert DoubleUnderscoreHandler().handle("__xxx_") == "__xxx__"

    def test_dunder_names_balanced(self) -> None:
        text = "__init__ and __main__ are special"
        assert heal(text) == text


class TestSingleAsterisk:
    """``*`` completion."""

    def test_closes_italic(self) -> None:
        assert heal("*italic") == "*italic*"

    def test_after_bold(self) -> None:
        assert heal("**bold** and *italic") == "**bold** and *italic*"

    def test_list_bullet_ignored(self) -> None:
        assert heal("* list item") == "* list item"

    def test_word_internal_ignored(self) -> None:
        assert heal("2*3*4 = 24") == "2*3*4 = 24"

    def test_escaped_ignored(self) -> None:
        assert heal("Escaped \\*not italic") == "Escaped \\*not italic"

    def test_horizontal_rule_ignored(self) -> None:
        assert heal("* * *") == "* * *"

    def test_inside_math_ignored(self) -> None:
        assert SingleAsteriskHandler().handle("$x * y$ text") == "$x * y$ text"

    def test_inside_link_url_ignored(self) -> None:
        text = "[a](http://x.com/*) *text"
        assert heal(text) == text + "*"

    def test_lone_marker_unchanged(self) -> None:
        assert heal("*") == "*"
        assert heal("text*") == "text*"

    def test_rule_line_then_italic(self) -> None:
        assert heal("* * *\n*text") == "* * *\n*text*"

    def test_indented_bullet_then_italic(self) -> None:
        assert heal("  * item *emph") == "  * item *emph*"

    def test_rule_lines_computed_once_per_pass(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[str] = []
        real = emphasis.thematic_break_lines

        def counting(text: str, marker: str) -> frozenset[int]:
            calls.append(marker)
            return real(text, marker)

        monkeypatch.setattr(emphasis, "thematic_break_lines", counting)
        SingleAsteriskHandler().handle("* " * 500 + "x")
        assert calls == ["*"]

    def test_long_spaced_marker_line(self) -> None:
        text = "* " * 20000 + "x"
        healed = heal(text)
        assert healed.startswith(text)
        assert len(healed) - len(text) <= 1


class TestSingleUnderscore:
    """``_`` completion."""

    def test_closes_italic(self) -> None:
        assert heal("_italic") == "_italic_"

    def test_closer_before_trailing_newline(self) -> None:
        assert SingleUnderscoreHandler().handle("_italic\n") == "_italic_\n"

    def test_snake_case_unchanged(self) -> None:
        assert heal("call snake_case_name now") == "call snake_case_name now"

    def test_unicode_word_internal_unchanged(self) -> None:
        assert heal("naïve_café_x") == "naïve_café_x"

    def test_trailing_underscore_unchanged(self) -> None:
        assert heal("word_") == "word_"

    def test_identifier_start_is_closed(self) -> None:
        assert heal("_privateVariable") == "_privateVariable_"

    def test_mixed_with_identifier(self) -> None:
        assert heal("The variable_name is _important") == "The variable_name is _important_"

    def test_escaped_ignored(self) -> None:
        assert heal("\\_escaped\\_ and _unescaped") == "\\_escaped\\_ and _unescaped_"

    def test_inside_math_ignored(self) -> None:
        assert heal("Math expression $x_") == "Math expression $x_"

    def test_url_underscores_unchanged(self) -> None:
        text = "Visit https://example.com/path_with_underscore"
        assert heal(text) == text


class TestStandaloneMarkers:
    """Markers without content are left alone until content streams in."""

    @pytest.mark.parametrize("text", ["**", "*", "_", "__", "***", "** __", "* _"])
    def test_unchanged(self, text: str) -> None:
        assert heal(text) == text
