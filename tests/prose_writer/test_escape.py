"""Tests for escaping and URL sanitization helpers."""

import pytest

from prose_writer.escape import (
    code_fence,
    escape_line_start,
    escape_markdown,
    escape_table_cell,
    inline_code,
    longest_backtick_run,
    normalize_whitespace,
    sanitize_url,
)


class TestEscapeMarkdown:
    """Tests for escape_markdown()."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("x_y", "x\\_y"),
            ("a*b", "a\\*b"),
            ("~x~", "\\~x\\~"),
            ("`x`", "\\`x\\`"),
            ("[a](b)", "\\[a\\]\\(b\\)"),
            ("a|b", "a\\|b"),
            ("!img", "\\!img"),
            ("a\\b", "a\\\\b"),
        ],
    )
    def test_punctuation(self, text: str, expected: str) -> None:
        assert escape_markdown(text) == expected

    def test_xml_entities(self) -> None:
        assert escape_markdown("<a href='x'>&</a>") == "&lt;a href='x'&gt;&amp;&lt;/a&gt;"

    def test_plain_text_unchanged(self) -> None:
        assert escape_markdown("Hello, world. 3 + 4 = 7") == "Hello, world. 3 + 4 = 7"

    def test_heading_marker_on_later_line(self) -> None:
        assert escape_markdown("a\n# b") == "a\n\\# b"

    def test_indented_marker(self) -> None:
        assert escape_markdown("  - item") == "  \\- item"

    def test_ordinal_with_parenthesis(self) -> None:
        # ")" is escaped as punctuation before the line-start pass
        assert escape_markdown("2) step") == "2\\) step"

    def test_decimal_is_not_an_ordinal(self) -> None:
        assert escape_markdown("1.5 is a number") == "1.5 is a number"


class TestEscapeLineStart:
    """Tests for escape_line_start()."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("# h", "\\# h"),
            ("> q", "\\> q"),
            ("+ p", "\\+ p"),
            ("- m", "\\- m"),
            ("10. ten", "10\\. ten"),
            ("3) three", "3\\) three"),
            ("mid # line", "mid # line"),
        ],
    )
    def test_markers(self, text: str, expected: str) -> None:
        assert escape_line_start(text) == expected


class TestCodeSpans:
    """Tests for backtick fence sizing."""

    def test_longest_backtick_run(self) -> None:
        assert longest_backtick_run("a``b```c`") == 3
        assert longest_backtick_run("none") == 0

    def test_inline_code_simple(self) -> None:
        assert inline_code("x") == "`x`"

    def test_inline_code_with_backticks_inside(self) -> None:
        assert inline_code("a``b") == "```a``b```"

    def test_inline_code_pads_edges(self) -> None:
        assert inline_code("`a") == "`` `a ``"
        assert inline_code("a ") == "` a  `"

    def test_code_fence_minimum(self) -> None:
        assert code_fence("print(1)") == "```"

    def test_code_fence_grows(self) -> None:
        assert code_fence("````\nx\n````") == "`````"
        assert code_fence("x", minimum=5) == "`````"


class TestSanitizeUrl:
    """Tests for sanitize_url()."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/a?b=1&c=2#frag",
            "http://example.com",
            "mailto:someone@example.com",
            "relative/path.md",
            "/absolute/path",
            "#anchor",
            "a%20b",
        ],
    )
    def test_kept(self, url: str) -> None:
        assert sanitize_url(url) == url

    def test_scheme_check_is_case_insensitive(self) -> None:
        assert sanitize_url("HTTPS://example.com") == "HTTPS://example.com"

    def test_rejected_scheme_uses_placeholder(self) -> None:
        assert sanitize_url("javascript:alert(1)") == "#"
        assert sanitize_url("javascript:alert(1)", placeholder="about:blank") == "about:blank"

    def test_control_characters_do_not_hide_scheme(self) -> None:
        assert sanitize_url("\x01java\nscript:alert(1)") == "#"

    def test_custom_allowed_schemes(self) -> None:
        assert sanitize_url("ftp://files", allowed_schemes=["ftp"]) == "ftp://files"
        assert sanitize_url("https://x", allowed_schemes=["ftp"]) == "#"

    def test_percent_encodes(self) -> None:
        assert sanitize_url("https://x.y/a b/ü") == "https://x.y/a%20b/%C3%BC"

    def test_escapes_parentheses(self) -> None:
        assert sanitize_url("https://x.y/wiki/A_(b)") == "https://x.y/wiki/A_\\(b\\)"

    def test_surrounding_whitespace_is_stripped(self) -> None:
        assert sanitize_url("  https://x.y  ") == "https://x.y"


class TestTableCells:
    """Tests for whitespace normalization and table cell escaping."""

    def test_normalize_whitespace(self) -> None:
        assert normalize_whitespace("  a \n\t b  ") == "a b"

    def test_escape_table_cell(self) -> None:
        assert escape_table_cell("a|b\nc") == "a\\|b c"
