"""Inline formatter bundle handed to builder callbacks."""

from __future__ import annotations

from prose_writer import markdown
from prose_writer import safe as safe_inline
from prose_writer.config import DEFAULT_CONFIG, WriterConfig
from prose_writer.fragments import Content, Trusted


class InlineFormatters:
    """The inline helpers matching a writer's mode.

    Plain writers get the prose_writer.markdown functions; safe writers get
    the prose_writer.safe ones, with link/image honouring the writer's URL
    policy. Available as ``writer.fmt`` inside builders:

        write.with_(lambda w: w.write("Hello", w.fmt.bold("World")))
    """

    __slots__ = ("safe", "config")

    def __init__(self, safe: bool = False, config: WriterConfig | None = None) -> None:
        self.safe = safe
        self.config = config or DEFAULT_CONFIG

    def bold(self, content: Content) -> str | Trusted:
        return safe_inline.bold(content) if self.safe else markdown.bold(content)

    def italic(self, content: Content) -> str | Trusted:
        return safe_inline.italic(content) if self.safe else markdown.italic(content)

    def code(self, content: Content) -> str | Trusted:
        return safe_inline.code(content) if self.safe else markdown.code(content)

    def inline(self, content: Content) -> str | Trusted:
        return self.code(content)

    def strike(self, content: Content) -> str | Trusted:
        return safe_inline.strike(content) if self.safe else markdown.strike(content)

    def link(self, text: Content, url: str) -> str | Trusted:
        if self.safe:
            return safe_inline.link(
                text, url, self.config.allowed_url_schemes, self.config.url_placeholder
            )
        return markdown.link(text, url)

    def image(self, alt: Content, url: str) -> str | Trusted:
        if self.safe:
            return safe_inline.image(
                alt, url, self.config.allowed_url_schemes, self.config.url_placeholder
            )
        return markdown.image(alt, url)
