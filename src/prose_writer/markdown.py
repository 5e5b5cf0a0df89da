"""Inline markdown formatters.

These return strings and never touch a writer, so they can be used
inside write() or any builder:

    write("Use", code("render()"), "with", bold("care"))
"""

from prose_writer.fragments import Content, SupportsRender, classify


def _inner(content: Content) -> str:
    if isinstance(content, SupportsRender):
        return content.render().strip()
    return classify(content).text


def bold(content: Content) -> str:
    """Wrap content in double asterisks."""
    return f"**{_inner(content)}**"


def italic(content: Content) -> str:
    """Wrap content in single asterisks."""
    return f"*{_inner(content)}*"


def code(content: Content) -> str:
    """Wrap content in backticks."""
    return f"`{_inner(content)}`"


inline = code


def strike(content: Content) -> str:
    """Wrap content in double tildes."""
    return f"~~{_inner(content)}~~"


def link(text: Content, url: str) -> str:
    """Create a markdown link."""
    return f"[{_inner(text)}]({url})"


def image(alt: Content, url: str) -> str:
    """Create a markdown image."""
    return f"![{_inner(alt)}]({url})"
