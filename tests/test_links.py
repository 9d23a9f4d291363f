"""Tests for incomplete link and image handling."""

import pytest

from remiendo import INCOMPLETE_LINK_URL, HealConfig, heal
from remiendo.handlers.builtins import LinkImageHandler


class TestIncompleteLinks:
    """Links are kept and pointed at the sentinel URL."""

    def test_sentinel_value(self) -> None:
        assert INCOMPLETE_LINK_URL == "streamdown:incomplete-link"

    def test_incomplete_text(self) -> None:
        assert (
            heal("Text with [incomplete link")
            == "Text with [incomplete link](streamdown:incomplete-link)"
        )

    def test_incomplete_url(self) -> None:
        assert (
            heal("Visit [our site](https://exa")
            == "Visit [our site](streamdown:incomplete-link)"
        )

    def test_nested_brackets_in_text(self) -> None:
        assert (
            heal("Text [outer [inner] text](incomplete")
            == "Text [outer [inner] text](streamdown:incomplete-link)"
        )

    def test_nested_unclosed_outer(self) -> None:
        assert (
            heal("Text [outer [inner]")
            == "Text [outer [inner]](streamdown:incomplete-link)"
        )

    def test_deep_nesting(self) -> None:
        assert heal("[foo [bar [baz") == "[foo [bar [baz](streamdown:incomplete-link)"

    def test_empty_url(self) -> None:
        assert heal("Text [foo [bar] baz](") == "Text [foo [bar] baz](streamdown:incomplete-link)"

    @pytest.mark.parametrize(
        "text",
        [
            "[link1](url1) and [link2](url2)",
            "Footnote[^1] here",
            "- [ ] task",
            "- [x] done",
        ],
    )
    def test_complete_unchanged(self, text: str) -> None:
        assert heal(text) == text

    def test_bracket_inside_code_ignored(self) -> None:
        text = "```\n[not a link\n```"
        assert heal(text) == text

    def test_bracket_inside_inline_code_ignored(self) -> None:
        assert heal("`[code` after") == "`[code` after"

    def test_sentinel_halts_pipeline(self) -> None:
        """Text inside an unfinished link is not reformatted."""
        assert heal("[link **bold") == "[link **bold](streamdown:incomplete-link)"

    def test_text_before_link_preserved(self) -> None:
        prefix = "Some *styled* text "
        healed = heal(prefix + "[partial")
        assert healed.startswith(prefix + "[partial")


class TestBracketsInInlineCode:
    """Brackets after an open backtick are code, not links."""

    def test_index_in_open_code_span(self) -> None:
        assert heal("Use `items[0") == "Use `items[0`"

    def test_character_class_in_open_code_span(self) -> None:
        assert heal("Regex `[a-z") == "Regex `[a-z`"

    def test_open_code_span_after_bold(self) -> None:
        healed = heal("**bold `a[1")
        assert INCOMPLETE_LINK_URL not in healed
        assert healed.count("`") % 2 == 0

    def test_url_inside_open_code_span(self) -> None:
        assert heal("Try `[a](http") == "Try `[a](http`"

    def test_link_after_closed_code_span(self) -> None:
        assert (
            heal("Call `f[0]` then [docs")
            == "Call `f[0]` then [docs](streamdown:incomplete-link)"
        )

    def test_handler_leaves_open_span_alone(self) -> None:
        assert LinkImageHandler().handle("x `y[") == "x `y["


class TestIncompleteImages:
    """Images with an unknown source are dropped."""

    def test_incomplete_alt_text(self) -> None:
        assert heal("Text with ![incomplete image") == "Text with "

    def test_whole_block_is_image(self) -> None:
        assert heal("![partial") == ""

    def test_incomplete_src(self) -> None:
        assert heal("![logo](./assets/log") == ""

    def test_nested_brackets_in_alt(self) -> None:
        assert LinkImageHandler().handle("Text ![outer [inner]") == "Text "

    def test_complete_image_unchanged(self) -> None:
        assert heal("![alt](src.png)") == "![alt](src.png)"


class TestTextOnlyMode:
    """``link_mode="text-only"`` shows bare link text."""

    @pytest.fixture
    def config(self) -> HealConfig:
        return HealConfig(link_mode="text-only")

    def test_incomplete_text(self, config: HealConfig) -> None:
        assert heal("Text with [incomplete link", config) == "Text with incomplete link"

    def test_incomplete_url(self, config: HealConfig) -> None:
        assert heal("[outer [nested] text](incomplete", config) == "outer [nested] text"

    def test_nested_unclosed_outer(self, config: HealConfig) -> None:
        assert heal("Text [outer [inner]", config) == "Text outer [inner]"

    def test_pipeline_continues(self, config: HealConfig) -> None:
        """No sentinel, so later handlers still run."""
        assert heal("[link **bold", config) == "link **bold**"

    def test_images_still_dropped(self, config: HealConfig) -> None:
        assert heal("Look ![img", config) == "Look "


class TestToggles:
    """Links and images can be disabled separately."""

    def test_links_disabled(self) -> None:
        assert heal("[link", HealConfig(links=False)) == "[link"

    def test_links_disabled_images_still_dropped(self) -> None:
        assert heal("x ![img", HealConfig(links=False)) == "x "

    def test_images_disabled(self) -> None:
        assert heal("![img", HealConfig(images=False)) == "![img"

    def test_halts_only_on_sentinel(self) -> None:
        handler = LinkImageHandler()
        assert handler.halts_pipeline("[a", "[a](streamdown:incomplete-link)")
        assert not handler.halts_pipeline("x", "x")
        assert not handler.halts_pipeline("![a", "")
