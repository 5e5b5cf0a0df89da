"""Markdown escaping and sanitization utilities.

Everything here is a pure function over plain text. Safe-mode writers
route untrusted values through these before embedding them.
"""

import re
from collections.abc import Iterable
from urllib.parse import quote

# Backslash must be part of the class so existing escapes are doubled.
_MARKDOWN_PUNCTUATION = re.compile(r"([\\`*_~()|!\[\]])")

_XML_ENTITIES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"))

# Block markers at the start of a line, after optional indentation
_LINE_START_MARKER = re.compile(r"^([ \t]*)([#>+\-])", re.MULTILINE)
_LINE_START_ORDINAL = re.compile(r"^([ \t]*)(\d+)([.)])(?=\s|$)", re.MULTILINE)

_BACKTICK_RUN = re.compile(r"`+")

_URL_SCHEME = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")
_URL_IGNORED = re.compile(r"[\x00-\x20\x7f]+")

# Characters encodeURI leaves alone, plus '%' so encoded input stays as-is
_URL_SAFE_CHARS = ";,/?:@&=+$#-_.!~*'()%"

DEFAULT_URL_SCHEMES = ("http", "https", "mailto")


def escape_line_start(text: str) -> str:
    """Escape block markers that would otherwise start a heading, quote or list."""
    text = _LINE_START_MARKER.sub(r"\1\\\2", text)
    return _LINE_START_ORDINAL.sub(r"\1\2\\\3", text)


def escape_markdown(text: str) -> str:
    """Escape text for safe embedding in markdown and XML-style tags.

    Handles:
    - Markdown punctuation (backslash, backtick, *, _, ~, parentheses, |, !, brackets)
    - XML-significant characters (&, <, >) as entities
    - Heading, blockquote, bullet and ordinal markers at line start
    """
    text = _MARKDOWN_PUNCTUATION.sub(r"\\\1", text)
    for char, entity in _XML_ENTITIES:
        text = text.replace(char, entity)
    return escape_line_start(text)


def longest_backtick_run(text: str) -> int:
    """Length of the longest run of consecutive backticks in text."""
    return max((len(run) for run in _BACKTICK_RUN.findall(text)), default=0)


def inline_code(text: str) -> str:
    """Wrap text in an inline code span that its content cannot close.

    The fence is one backtick longer than the longest backtick run inside
    the text. Content starting or ending with whitespace or a backtick is
    padded with one space per side.
    """
    fence = "`" * (longest_backtick_run(text) + 1)
    if text and (text[0].isspace() or text[-1].isspace() or "`" in (text[0], text[-1])):
        text = f" {text} "
    return f"{fence}{text}{fence}"


def code_fence(body: str, minimum: int = 3) -> str:
    """Backtick fence long enough that no line of body can close it."""
    return "`" * max(minimum, longest_backtick_run(body) + 1)


def sanitize_url(
    url: str,
    allowed_schemes: Iterable[str] = DEFAULT_URL_SCHEMES,
    placeholder: str = "#",
) -> str:
    """Make a link or image destination safe to embed.

    URLs with a scheme outside allowed_schemes become placeholder.
    Relative URLs (no scheme) are kept. The result is percent-encoded
    and literal parentheses are backslash-escaped.
    """
    match = _URL_SCHEME.match(_URL_IGNORED.sub("", url))
    if match and match.group(1).lower() not in {s.lower() for s in allowed_schemes}:
        return placeholder

    encoded = quote(url.strip(), safe=_URL_SAFE_CHARS)
    return encoded.replace("(", "\\(").replace(")", "\\)")


def normalize_whitespace(text: str) -> str:
    """Normalize whitespace in text (collapse multiple spaces/newlines)."""
    return re.sub(r"\s+", " ", text).strip()


def escape_table_cell(text: str) -> str:
    """Escape content for safe use in a markdown table cell.

    Collapses newlines so the row stays on one line, then applies
    escape_markdown (which also covers pipes).
    """
    return escape_markdown(normalize_whitespace(text))
