"""Safe-mode inline formatters.

Same call shapes as prose_writer.markdown, but plain values are escaped
and results come back as Trusted so they are never escaped a second time:

    write("Result:", bold("2 * 3"))   # Result: **2 \\* 3**

``prose_writer.safe.write`` is the safe writer factory, equivalent to
``prose_writer.write.safe``.
"""

import logging
from collections.abc import Iterable
from typing import Any

from prose_writer.escape import (
    DEFAULT_URL_SCHEMES,
    escape_markdown,
    inline_code,
    sanitize_url,
)
from prose_writer.fragments import Content, Plain, SupportsRender, Trusted, classify

logger = logging.getLogger(__name__)


def _escaped(content: Content) -> str:
    if isinstance(content, SupportsRender):
        return content.render().strip()
    fragment = classify(content)
    if isinstance(fragment, Plain):
        return escape_markdown(fragment.text)
    return fragment.text


def _destination(url: str, allowed_schemes: Iterable[str], placeholder: str) -> str:
    safe_url = sanitize_url(url, allowed_schemes, placeholder)
    if safe_url == placeholder and url != placeholder:
        logger.debug("Rejected link destination %r", url)
    return safe_url


def bold(content: Content) -> Trusted:
    """Escape content and wrap it in double asterisks."""
    return Trusted(f"**{_escaped(content)}**")


def italic(content: Content) -> Trusted:
    """Escape content and wrap it in single asterisks."""
    return Trusted(f"*{_escaped(content)}*")


def code(content: Content) -> Trusted:
    """Wrap content in a code span whose fence the content cannot close."""
    if isinstance(content, SupportsRender):
        return Trusted(inline_code(content.render().strip()))
    return Trusted(inline_code(classify(content).text))


inline = code


def strike(content: Content) -> Trusted:
    """Escape content and wrap it in double tildes."""
    return Trusted(f"~~{_escaped(content)}~~")


def link(
    text: Content,
    url: str,
    allowed_schemes: Iterable[str] = DEFAULT_URL_SCHEMES,
    placeholder: str = "#",
) -> Trusted:
    """Create a markdown link with escaped text and a sanitized destination."""
    return Trusted(f"[{_escaped(text)}]({_destination(url, allowed_schemes, placeholder)})")


def image(
    alt: Content,
    url: str,
    allowed_schemes: Iterable[str] = DEFAULT_URL_SCHEMES,
    placeholder: str = "#",
) -> Trusted:
    """Create a markdown image with escaped alt text and a sanitized source."""
    return Trusted(f"![{_escaped(alt)}]({_destination(url, allowed_schemes, placeholder)})")


def __getattr__(name: str) -> Any:
    # writer imports this module through formatters, so resolve lazily
    if name == "write":
        from prose_writer.writer import write

        return write.safe
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
