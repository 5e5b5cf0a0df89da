"""Chainable writer for markdown-flavoured prose.

A ProseWriter accumulates already-rendered fragments. Every append
consults the padding rule first, so consecutive blocks are always
separated by nothing (after next_line()), one newline, or one blank line.

Example:
    prompt = (
        write("You are a code reviewer.")
        .heading(2, "Rules")
        .list("Be concise", "Cite line numbers")
        .tag("diff", diff_text)
    )
    print(prompt)

Append methods mutate and return the same writer. clone(), fill(),
compact() and trim() return new writers and leave the receiver untouched.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from enum import Enum
from typing import Any, TypeVar, Union

import yaml
from pydantic import BaseModel

from prose_writer.config import DEFAULT_CONFIG, WriterConfig
from prose_writer.escape import code_fence, escape_markdown, escape_table_cell, normalize_whitespace
from prose_writer.formatters import InlineFormatters
from prose_writer.fragments import Content, Plain, SupportsRender, classify, stringify
from prose_writer.lists import ListBuilder, ListItem
from prose_writer.schema import SchemaEmbedOptions, SchemaFormat, resolve_schema
from prose_writer.text import estimate_tokens, to_plain_text
from prose_writer.validation import (
    OutputValidator,
    ValidationOptions,
    YamlParser,
    validate_output,
)

T = TypeVar("T")

Builder = Callable[["ProseWriter"], object]
ListBuilderFn = Callable[[ListBuilder], object]
ListArg = Union[Content, ListBuilderFn]
TaskArg = Union[Content, tuple[Content, bool], ListBuilderFn]
BlockContent = Union[str, SupportsRender, Builder]

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


class CalloutKind(str, Enum):
    """GitHub alert keywords accepted by callout()."""

    NOTE = "NOTE"
    TIP = "TIP"
    IMPORTANT = "IMPORTANT"
    WARNING = "WARNING"
    CAUTION = "CAUTION"


def _is_builder(value: object) -> bool:
    return callable(value) and not isinstance(value, SupportsRender)


def _finite(value: Any) -> Any:
    """Replace NaN and infinities with None so the JSON stays valid."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Mapping):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(item) for item in value]
    return value


class ProseWriter:
    """Chainable accumulator of formatted text.

    Args:
        content: Optional seed text (a trailing newline is added if missing)
        safe: Escape caller-supplied values (fixed for the writer's lifetime)
        config: Rendering defaults, inherited by every child writer
    """

    def __init__(
        self,
        content: str | None = None,
        *,
        safe: bool = False,
        config: WriterConfig | None = None,
    ) -> None:
        self._parts: list[str] = []
        self._skip_next_padding = False
        self._safe = safe
        self.config = config or DEFAULT_CONFIG
        self.fmt = InlineFormatters(safe, self.config)
        if content:
            self._parts.append(content if content.endswith("\n") else content + "\n")

    @property
    def safe(self) -> bool:
        """Whether caller-supplied values are escaped."""
        return self._safe

    # Padding

    def _padding(self) -> str:
        """Whitespace needed before the next fragment.

        Empty after next_line() or when nothing has been written; otherwise
        whatever completes a blank line after the last fragment.
        """
        if self._skip_next_padding or not self._parts:
            self._skip_next_padding = False
            return ""
        last = self._parts[-1]
        if last.endswith("\n\n"):
            return ""
        if last.endswith("\n"):
            return "\n"
        return "\n\n"

    def _push(self, body: str) -> ProseWriter:
        self._parts.append(self._padding() + body)
        return self

    # Helpers

    def _child(self) -> ProseWriter:
        return ProseWriter(safe=self._safe, config=self.config)

    def _derive(self, text: str) -> ProseWriter:
        return ProseWriter(text or None, safe=self._safe, config=self.config)

    def _build(self, builder: Builder) -> ProseWriter:
        child = self._child()
        builder(child)
        return child

    def _text(self, value: Content) -> str:
        fragment = classify(value)
        if self._safe and isinstance(fragment, Plain):
            return escape_markdown(fragment.text)
        return fragment.text

    def _join(self, values: Iterable[Content]) -> str:
        return " ".join(self._text(value) for value in values)

    def _block_text(self, content: BlockContent) -> str:
        """Resolve string / writer / builder content; strings escape in safe mode."""
        if _is_builder(content):
            return self._build(content).render()  # type: ignore[arg-type]
        if isinstance(content, SupportsRender):
            return content.render()
        return self._text(content)

    def _collect(self, builder: ListBuilderFn) -> list[ListItem]:
        list_builder = ListBuilder(self._child, self.fmt)
        builder(list_builder)
        return list_builder.items

    @staticmethod
    def _indent(writer: SupportsRender) -> str:
        return "\n".join(f"  {line}" for line in writer.render().rstrip().split("\n"))

    # Paragraphs

    def write(self, *content: Content) -> ProseWriter:
        """Append a paragraph; multiple values are joined with a space.

        On an empty writer an empty write is a no-op. On a non-empty writer
        write() with no arguments adds an extra blank line.
        """
        joined = self._join(content)
        if not self._parts and not joined:
            return self
        return self._push(joined + "\n")

    def next_line(self) -> ProseWriter:
        """Glue the next append to the previous line (no paragraph break)."""
        self._skip_next_padding = True
        return self

    def raw(self, content: str) -> ProseWriter:
        """Append content verbatim, without padding or escaping."""
        if content:
            self._parts.append(content)
        return self

    # Lists

    def unordered_list(self, *items: ListArg) -> ProseWriter:
        """Append a bulleted list.

        Pass items directly or a single callback receiving a ListBuilder.
        Writer items are indented two spaces to form nested lists.
        """
        if len(items) == 1 and _is_builder(items[0]):
            items = tuple(self._collect(items[0]))  # type: ignore[arg-type]

        lines = [
            self._indent(item) if isinstance(item, SupportsRender) else f"- {self._text(item)}"
            for item in items
        ]
        return self._push("\n".join(lines) + "\n\n")

    def list(self, *items: ListArg) -> ProseWriter:
        """Alias for unordered_list()."""
        return self.unordered_list(*items)

    def ordered_list(self, *items: ListArg) -> ProseWriter:
        """Append a numbered list; only scalar items advance the number."""
        if len(items) == 1 and _is_builder(items[0]):
            items = tuple(self._collect(items[0]))  # type: ignore[arg-type]

        lines = []
        number = 1
        for item in items:
            if isinstance(item, SupportsRender):
                lines.append(self._indent(item))
            else:
                lines.append(f"{number}. {self._text(item)}")
                number += 1
        return self._push("\n".join(lines) + "\n\n")

    def tasks(self, *items: TaskArg) -> ProseWriter:
        """Append a task list.

        Items are values (unchecked) or ``(value, checked)`` pairs. A single
        callback receives a ListBuilder with task()/todo()/done().
        """
        if len(items) == 1 and _is_builder(items[0]):
            return self.unordered_list(items[0])  # type: ignore[arg-type]

        lines = []
        for item in items:
            checked = False
            if isinstance(item, (tuple, list)) and len(item) == 2 and isinstance(item[1], bool):
                item, checked = item
            checkbox = "[x]" if checked else "[ ]"
            lines.append(f"- {checkbox} {self._text(item)}")  # type: ignore[arg-type]
        return self._push("\n".join(lines) + "\n\n")

    # Blocks

    def heading(self, level: int, *content: Content) -> ProseWriter:
        """Append a heading of the given level (1-6)."""
        return self._push(f"{'#' * level} {self._join(content)}\n\n")

    def blockquote(self, *lines: Content) -> ProseWriter:
        """Append a blockquote; separate arguments become separate paragraphs."""
        paragraphs = []
        for line in lines:
            text = self._text(line)
            paragraphs.append("\n".join(f"> {part}" if part else ">" for part in text.split("\n")))
        return self._push("\n>\n".join(paragraphs) + "\n\n")

    def codeblock(self, language: str, content: BlockContent) -> ProseWriter:
        """Append a fenced code block.

        content is a literal string, a writer, or a callback building a
        child writer whose trimmed text becomes the body. Code is never
        escaped; in safe mode the fence grows past any backtick run inside.
        language is emitted verbatim in both modes.
        """
        if _is_builder(content):
            code = self._build(content).render().strip()  # type: ignore[arg-type]
        elif isinstance(content, SupportsRender):
            code = content.render().strip()
        else:
            code = stringify(content)
        fence = code_fence(code) if self._safe else "```"
        return self._push(f"{fence}{language}\n{code}\n{fence}\n\n")

    @property
    def separator(self) -> ProseWriter:
        """Append a horizontal rule (property: ``writer.separator``)."""
        return self._push("---\n\n")

    def callout(self, kind: CalloutKind | str, content: BlockContent) -> ProseWriter:
        """Append a GitHub-style alert: a blockquote opening with ``[!KIND]``."""
        keyword = kind.value if isinstance(kind, CalloutKind) else str(kind).upper()
        body = self._block_text(content).strip()
        lines = [f"[!{keyword}]"]
        if body:
            lines.extend(body.split("\n"))
        quoted = "\n".join(f"> {line}" if line else ">" for line in lines)
        return self._push(quoted + "\n\n")

    def tag(self, name: str, content: BlockContent) -> ProseWriter:
        """Wrap content in ``<name>`` / ``</name>``.

        Tags end with a single newline, not a blank line. Only content is
        escaped in safe mode; name is emitted verbatim.
        """
        body = self._block_text(content).rstrip()
        return self._push(f"<{name}>\n{body}\n</{name}>\n")

    def delimit(self, open: str, close: str, content: str | SupportsRender) -> ProseWriter:
        """Wrap content between caller-supplied delimiters. Never escaped."""
        if isinstance(content, SupportsRender):
            text = content.render().rstrip()
        else:
            text = stringify(content)
        return self._push(f"{open}\n{text}\n{close}\n")

    def comment(self, content: str) -> ProseWriter:
        """Append an HTML comment. Content is never escaped."""
        return self._push(f"<!-- {content} -->\n\n")

    def _cell(self, value: Any) -> str:
        if isinstance(value, ProseWriter):
            return normalize_whitespace(value.to_plain_text())
        if isinstance(value, SupportsRender):
            return normalize_whitespace(value.render())
        fragment = classify(value)
        if self._safe and isinstance(fragment, Plain):
            return escape_table_cell(fragment.text)
        return fragment.text

    def table(
        self,
        headers: Sequence[str],
        rows: Iterable[Sequence[Any] | Mapping[str, Any]],
    ) -> ProseWriter:
        """Append a pipe table.

        Rows are value sequences or mappings keyed by header. Writer cells
        are rendered through their plain-text projection.
        """
        lines = [
            "| " + " | ".join(self._cell(header) for header in headers) + " |",
            "| " + " | ".join("---" for _ in headers) + " |",
        ]
        for row in rows:
            if isinstance(row, Mapping):
                values = [row.get(header) for header in headers]
            else:
                values = list(row)
            lines.append("| " + " | ".join(self._cell(value) for value in values) + " |")
        return self._push("\n".join(lines) + "\n\n")

    def definitions(self, entries: Mapping[str, Content]) -> ProseWriter:
        """Append ``**key**: value`` lines in insertion order."""
        lines = [f"{self.fmt.bold(key)}: {self._text(value)}" for key, value in entries.items()]
        return self._push("\n".join(lines) + "\n\n")

    def section(self, name: str, builder: Builder, level: int = 2) -> ProseWriter:
        """Append a heading followed by content built in a child writer."""
        child = self._build(builder)
        return self._push(f"{'#' * level} {self._text(name)}\n\n{child.render()}")

    # Inline appenders

    def _inline(self, formatted: object) -> ProseWriter:
        return self._push(f"{formatted}\n")

    def bold(self, content: Content) -> ProseWriter:
        return self._inline(self.fmt.bold(content))

    def italic(self, content: Content) -> ProseWriter:
        return self._inline(self.fmt.italic(content))

    def strike(self, content: Content) -> ProseWriter:
        return self._inline(self.fmt.strike(content))

    def code(self, content: Content) -> ProseWriter:
        """Append inline code as its own paragraph."""
        return self._inline(self.fmt.code(content))

    def link(self, text: Content, url: str) -> ProseWriter:
        return self._inline(self.fmt.link(text, url))

    def image(self, alt: Content, url: str) -> ProseWriter:
        return self._inline(self.fmt.image(alt, url))

    # Structured output

    def json(
        self,
        data: Any,
        *,
        schema: Any = None,
        validate: OutputValidator | None = None,
        label: str | None = None,
    ) -> ProseWriter:
        """Append a ```json block.

        Strings are embedded as-is; other data is serialized. NaN and
        infinities become null, and values json cannot encode are
        embedded as their str(). With a validator, invalid data raises
        ValidationError and nothing is appended.
        """
        options = ValidationOptions(schema=schema, validate=validate, label=label)
        validate_output("json", data, options)

        if isinstance(data, str):
            text = data
        else:
            if isinstance(data, BaseModel):
                data = data.model_dump(mode="json")
            text = json.dumps(
                _finite(data),
                indent=self.config.json_indent,
                ensure_ascii=False,
                allow_nan=False,
                default=str,
            )
        return self.codeblock("json", text)

    def yaml(
        self,
        data: Any,
        *,
        schema: Any = None,
        validate: OutputValidator | None = None,
        label: str | None = None,
        parse_yaml: YamlParser | None = None,
    ) -> ProseWriter:
        """Append a ```yaml block (same validation rules as json())."""
        options = ValidationOptions(
            schema=schema, validate=validate, label=label, parse_yaml=parse_yaml
        )
        validate_output("yaml", data, options)

        if isinstance(data, str):
            text = data
        else:
            if isinstance(data, BaseModel):
                data = data.model_dump(mode="json")
            text = yaml.safe_dump(
                data,
                sort_keys=self.config.yaml_sort_keys,
                allow_unicode=True,
                default_flow_style=False,
            )
            # Scalars are dumped with an explicit document end marker
            text = text.removesuffix("\n...\n").rstrip("\n")
        return self.codeblock("yaml", text)

    def schema(
        self,
        data: Any,
        *,
        format: SchemaFormat = "json",
        title: str | None = None,
        level: int = 2,
        tag: str | None = None,
    ) -> ProseWriter:
        """Embed a schema: optional heading, then a json/yaml block.

        data is a JSON-Schema mapping or a pydantic model class. With tag,
        the block is wrapped in ``<tag>...</tag>``.
        """
        options = SchemaEmbedOptions(format=format, title=title, level=level, tag=tag)
        resolved = resolve_schema(data)

        if options.title:
            self.heading(options.level, options.title)

        target = self._child() if options.tag else self
        if options.format == "yaml":
            target.yaml(resolved)
        else:
            target.json(resolved)

        if options.tag:
            self.tag(options.tag, target)
        return self

    # Composition

    def append(self, writer: SupportsRender) -> ProseWriter:
        """Append another writer's rendered text (copied, never escaped)."""
        content = writer.render()
        if content:
            self._push(content)
        return self

    def when(self, condition: object, builder: Builder) -> ProseWriter:
        """Call builder with this writer only if condition is truthy."""
        if condition:
            builder(self)
        return self

    def with_(self, builder: Builder) -> ProseWriter:
        """Call builder with this writer (grouping aid for chains)."""
        builder(self)
        return self

    def each(
        self, items: Iterable[T], builder: Callable[[T, ProseWriter, int], object]
    ) -> ProseWriter:
        """Call ``builder(item, writer, index)`` for every item."""
        for index, item in enumerate(items):
            builder(item, self, index)
        return self

    # Derivation

    def fill(self, variables: Mapping[str, Any]) -> ProseWriter:
        """Return a new writer with ``{{name}}`` placeholders substituted.

        Placeholders without a value are left untouched.
        """

        def substitute(match: re.Match[str]) -> str:
            value = variables.get(match.group(1))
            return match.group(0) if value is None else stringify(value)

        return self._derive(_PLACEHOLDER.sub(substitute, self.render()))

    def clone(self) -> ProseWriter:
        """Return an independent copy with the same mode and config."""
        cloned = self._child()
        cloned._parts = self._parts.copy()
        return cloned

    def compact(self) -> ProseWriter:
        """Return a new writer with runs of 3+ newlines collapsed to two."""
        return self._derive(re.sub(r"\n{3,}", "\n\n", self.render()))

    def trim(self) -> ProseWriter:
        """Return a new writer with surrounding whitespace removed."""
        return self._derive(self.render().strip())

    # Output

    def render(self) -> str:
        """Concatenate all fragments."""
        return "".join(self._parts)

    def to_plain_text(self) -> str:
        """Render and strip markdown formatting."""
        return to_plain_text(self.render())

    def tokens(self, counter: Callable[[str], int] | None = None) -> int:
        """Estimate tokens (ceil(chars / config.chars_per_token) by default)."""
        return estimate_tokens(self.render(), counter, self.config.chars_per_token)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"ProseWriter({self.render()!r}, safe={self._safe})"

    # Constructors

    @classmethod
    def empty(cls) -> ProseWriter:
        """Create an empty writer."""
        return cls()

    @classmethod
    def join(cls, *writers: SupportsRender) -> ProseWriter:
        """Concatenate the rendered text of several writers, without padding."""
        result = cls()
        for writer in writers:
            result.raw(writer.render())
        return result

    @classmethod
    def from_template(cls, template: str) -> ProseWriter:
        """Create a writer seeded with template text (see fill())."""
        return cls(template)


class WriteFactory:
    """Entry point for new writers: ``write("Hello")``.

    Also exposes ``with_``, ``list``, ``unordered_list``, ``ordered_list``
    and ``tasks`` as starters, and ``write.safe`` for safe-mode writers.
    """

    def __init__(self, safe: bool = False, config: WriterConfig | None = None) -> None:
        self._safe = safe
        self.config = config

    def _new(self) -> ProseWriter:
        return ProseWriter(safe=self._safe, config=self.config)

    def __call__(self, *content: Content) -> ProseWriter:
        return self._new().write(*content)

    @property
    def safe(self) -> WriteFactory:
        """Factory producing safe-mode writers."""
        return WriteFactory(safe=True, config=self.config)

    def configured(self, config: WriterConfig) -> WriteFactory:
        """Factory producing writers with the given config."""
        return WriteFactory(safe=self._safe, config=config)

    def with_(self, builder: Builder) -> ProseWriter:
        return self._new().with_(builder)

    def unordered_list(self, *items: ListArg) -> ProseWriter:
        return self._new().unordered_list(*items)

    def list(self, *items: ListArg) -> ProseWriter:
        return self._new().list(*items)

    def ordered_list(self, *items: ListArg) -> ProseWriter:
        return self._new().ordered_list(*items)

    def tasks(self, *items: TaskArg) -> ProseWriter:
        return self._new().tasks(*items)


write = WriteFactory()
