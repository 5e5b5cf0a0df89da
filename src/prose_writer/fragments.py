"""Trusted/plain fragment types.

Every value that reaches a formatter is classified as either Trusted
(already escaped or produced by a writer, never escaped again) or Plain
(caller-supplied text, escaped when the writer is in safe mode).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable


@runtime_checkable
class SupportsRender(Protocol):
    """Anything that renders to finished markdown text (e.g. ProseWriter)."""

    def render(self) -> str:
        """Return the rendered text."""
        ...


@dataclass(frozen=True)
class Trusted:
    """Text that must be embedded verbatim."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Plain:
    """Untrusted text supplied directly by a caller."""

    text: str

    def __str__(self) -> str:
        return self.text


Fragment = Union[Trusted, Plain]

Content = Union[str, int, float, bool, None, Trusted, Plain, SupportsRender]


def stringify(value: object) -> str:
    """Convert a scalar to text (None is empty, booleans are lowercase)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def classify(value: Content) -> Fragment:
    """Classify a value as Trusted or Plain.

    Writers render to their full text, right-trimmed, and count as trusted.
    """
    if isinstance(value, (Trusted, Plain)):
        return value
    if isinstance(value, SupportsRender):
        return Trusted(value.render().rstrip())
    return Plain(stringify(value))
