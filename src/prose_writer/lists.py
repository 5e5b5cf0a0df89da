"""Builder for (possibly nested) list items."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Union

from prose_writer.formatters import InlineFormatters
from prose_writer.fragments import Content, Trusted

if TYPE_CHECKING:
    from prose_writer.writer import ListArg, ProseWriter

ListItem = Union[Trusted, "ProseWriter"]


class ListBuilder:
    """Collects list items inside a list()/ordered_list()/tasks() callback.

    Scalar items are rendered immediately (escaped in safe mode) and kept
    as trusted text; nested lists and comments are kept as child writers
    so the list formatter can indent them.

    Example:
        write.list(lambda l: (
            l.item("Fruits"),
            l.list("Apple", "Banana"),
            l.item("Vegetables", l.bold("fresh")),
        ))
    """

    def __init__(self, spawn: Callable[[], ProseWriter], fmt: InlineFormatters) -> None:
        self._spawn = spawn
        self.fmt = fmt
        self.items: list[ListItem] = []

    def _line(self, *content: Content) -> str:
        return self._spawn().write(*content).render().rstrip()

    def _nest(self, build: Callable[[ProseWriter], object]) -> ListBuilder:
        sub = self._spawn()
        build(sub)
        self.items.append(sub)
        return self

    def item(self, *content: Content) -> ListBuilder:
        """Add an item; multiple values are joined with a space."""
        self.items.append(Trusted(self._line(*content)))
        return self

    def task(self, checked: bool, *content: Content) -> ListBuilder:
        """Add a checkbox item."""
        checkbox = "[x] " if checked else "[ ] "
        self.items.append(Trusted(checkbox + self._line(*content)))
        return self

    def todo(self, *content: Content) -> ListBuilder:
        return self.task(False, *content)

    def done(self, *content: Content) -> ListBuilder:
        return self.task(True, *content)

    def comment(self, content: str) -> ListBuilder:
        """Add an HTML comment, nested under the previous item."""
        return self._nest(lambda sub: sub.comment(content))

    def unordered_list(self, *items: ListArg) -> ListBuilder:
        """Add a nested unordered list (items or a builder callback)."""
        return self._nest(lambda sub: sub.unordered_list(*items))

    def list(self, *items: ListArg) -> ListBuilder:
        return self.unordered_list(*items)

    def ordered_list(self, *items: ListArg) -> ListBuilder:
        """Add a nested ordered list; its numbering starts again at 1."""
        return self._nest(lambda sub: sub.ordered_list(*items))

    # Inline formatters

    def bold(self, content: Content) -> str | Trusted:
        return self.fmt.bold(content)

    def italic(self, content: Content) -> str | Trusted:
        return self.fmt.italic(content)

    def code(self, content: Content) -> str | Trusted:
        return self.fmt.code(content)

    def inline(self, content: Content) -> str | Trusted:
        return self.fmt.inline(content)

    def strike(self, content: Content) -> str | Trusted:
        return self.fmt.strike(content)

    def link(self, text: Content, url: str) -> str | Trusted:
        return self.fmt.link(text, url)

    def image(self, alt: Content, url: str) -> str | Trusted:
        return self.fmt.image(alt, url)
