"""Tests for plain-text projection and token estimation."""

from prose_writer import ProseWriter, WriterConfig, write
from prose_writer.text import estimate_tokens, to_plain_text


class TestToPlainText:
    """Tests for to_plain_text()."""

    def test_heading_and_emphasis(self) -> None:
        source = "# Title\n\nSome **bold** and *italic* and ~~old~~ text.\n"
        assert to_plain_text(source) == "Title\n\nSome bold and italic and old text."

    def test_links_and_images_keep_text(self) -> None:
        assert to_plain_text("See [docs](https://x.y) and ![logo](l.png)") == "See docs and logo"

    def test_code_block_keeps_body(self) -> None:
        assert to_plain_text("```py\nprint(1)\n```\n") == "print(1)"

    def test_inline_code(self) -> None:
        assert to_plain_text("Use `x()` now") == "Use x() now"

    def test_list_markers(self) -> None:
        assert to_plain_text("- a\n- [x] b\n- [ ] c\n1. d\n") == "a\nb\nc\nd"

    def test_blockquote(self) -> None:
        assert to_plain_text("> quoted\n>\n> more\n") == "quoted\n\nmore"

    def test_callout(self) -> None:
        assert to_plain_text("> [!NOTE]\n> careful\n") == "careful"

    def test_tags_and_comments_removed(self) -> None:
        assert to_plain_text("<ctx>\nhello\n</ctx>\n<!-- hidden -->\n") == "hello"

    def test_rule_removed(self) -> None:
        assert to_plain_text("a\n\n---\n\nb") == "a\n\nb"

    def test_table(self) -> None:
        source = "| A | B |\n| --- | --- |\n| 1 | x\\|y |\n"
        assert to_plain_text(source) == "A B\n1 x|y"

    def test_escapes_and_entities_undone(self) -> None:
        assert to_plain_text("a \\* b &lt;c&gt; \\_d\\_") == "a * b <c> _d_"

    def test_whitespace_collapsed(self) -> None:
        assert to_plain_text("a    b\n\n\n\nc  ") == "a b\n\nc"

    def test_safe_writer_round_trip(self) -> None:
        assert write.safe("2 * 3 < 7").to_plain_text() == "2 * 3 < 7"

    def test_writer_document(self) -> None:
        doc = (
            write("Intro")
            .heading(2, "Steps")
            .ordered_list("one", "two")
            .tag("note", "be careful")
        )
        assert doc.to_plain_text() == "Intro\n\nSteps\n\none\ntwo\n\nbe careful"


class TestEstimateTokens:
    """Tests for token estimation."""

    def test_default_ratio(self) -> None:
        assert estimate_tokens("abcde") == 2
        assert estimate_tokens("") == 0

    def test_custom_ratio(self) -> None:
        assert estimate_tokens("abcde", chars_per_token=1) == 5

    def test_counter(self) -> None:
        assert estimate_tokens("one two three", counter=lambda t: len(t.split())) == 3

    def test_writer_tokens(self) -> None:
        assert write("Hello").tokens() == 2

    def test_writer_tokens_with_counter(self) -> None:
        assert write("Hello").tokens(lambda text: 42) == 42

    def test_writer_uses_config_ratio(self) -> None:
        writer = ProseWriter("abcd", config=WriterConfig(chars_per_token=2))
        assert writer.tokens() == 3
