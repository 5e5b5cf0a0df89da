"""Plain-text projection and token estimation for rendered markdown."""

import html
import math
import re
from collections.abc import Callable

_CODE_BLOCK = re.compile(r"(`{3,})[^\n]*\n([\s\S]*?)\n?\1")
_INLINE_CODE = re.compile(r"(?<!\\)(`+)(.+?)(?<!`)\1(?!`)")
_HEADING = re.compile(r"^#{1,6}\s+(.*)$", re.MULTILINE)
_IMAGE = re.compile(r"!\[([^\]]*)\]\((?:\\.|[^)])*\)")
_LINK = re.compile(r"\[([^\]]+)\]\((?:\\.|[^)])*\)")
_BOLD = re.compile(r"(?<!\\)\*\*(.+?)(?<!\\)\*\*")
_ITALIC = re.compile(r"(?<![\\*])\*([^*\n]+?)(?<!\\)\*")
_STRIKE = re.compile(r"(?<!\\)~~(.+?)(?<!\\)~~")
_CALLOUT = re.compile(r"^>[ \t]?\[!(NOTE|TIP|IMPORTANT|WARNING|CAUTION)\][ \t]*$", re.MULTILINE)
_BLOCKQUOTE = re.compile(r"^>[ \t]?", re.MULTILINE)
_RULE = re.compile(r"^---$", re.MULTILINE)
_BULLET = re.compile(r"^([ \t]*)[-*][ \t]+(?:\[[ x]\][ \t]+)?", re.MULTILINE)
_ORDINAL = re.compile(r"^([ \t]*)\d+\.[ \t]+", re.MULTILINE)
_COMMENT = re.compile(r"<!--[\s\S]*?-->")
_TAG = re.compile(r"<[^>]+>")
_TABLE_ROW = re.compile(r"^[ \t]*\|(.*)\|[ \t]*$", re.MULTILINE)
_TABLE_CELL_SPLIT = re.compile(r"(?<!\\)\|")
_TABLE_RULE = re.compile(r"^[ \t]*-[ \t\-]*(?:\n|$)", re.MULTILINE)
_ESCAPE = re.compile(r"\\([\\`*_~()|!\[\]#>+\-.])")


def _table_row(match: re.Match[str]) -> str:
    cells = (cell.strip() for cell in _TABLE_CELL_SPLIT.split(match.group(1)))
    return " ".join(cell for cell in cells if cell)


def to_plain_text(markdown: str) -> str:
    """Strip markdown formatting, keeping the readable text.

    Code blocks keep their body, links and images keep their text, tags
    and comments are dropped, backslash escapes and entities are undone.
    """
    text = _CODE_BLOCK.sub(lambda m: m.group(2), markdown)
    text = _INLINE_CODE.sub(lambda m: m.group(2).strip(), text)
    text = _HEADING.sub(r"\1", text)
    text = _IMAGE.sub(r"\1", text)
    text = _LINK.sub(r"\1", text)
    text = _BOLD.sub(r"\1", text)
    text = _ITALIC.sub(r"\1", text)
    text = _STRIKE.sub(r"\1", text)
    text = _CALLOUT.sub("", text)
    text = _BLOCKQUOTE.sub("", text)
    text = _RULE.sub("", text)
    text = _BULLET.sub(r"\1", text)
    text = _ORDINAL.sub(r"\1", text)
    text = _COMMENT.sub("", text)
    text = _TAG.sub("", text)

    # Table formatting
    text = _TABLE_ROW.sub(_table_row, text)
    text = _TABLE_RULE.sub("", text)

    text = _ESCAPE.sub(r"\1", text)
    text = html.unescape(text)

    text = re.sub(r"[ \t]+$", "", text, flags=re.MULTILINE)
    text = re.sub(r" {2,}", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def estimate_tokens(
    text: str,
    counter: Callable[[str], int] | None = None,
    chars_per_token: int = 4,
) -> int:
    """Estimate the token count of text.

    Uses counter when provided, otherwise ceil(len(text) / chars_per_token).
    """
    if counter is not None:
        return counter(text)
    return math.ceil(len(text) / chars_per_token)
