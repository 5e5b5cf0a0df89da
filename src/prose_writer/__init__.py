"""prose-writer: chainable builder for markdown-flavoured prompts and documents.

This package provides:
- ProseWriter, a fluent accumulator with consistent paragraph spacing
- Block formatters (lists, headings, tables, code blocks, callouts, tags)
- Inline formatters, plain (prose_writer.markdown) and escaping (prose_writer.safe)
- Safe mode for embedding untrusted text
- Validated JSON/YAML embedding with pluggable validators
"""

from prose_writer.config import WriterConfig, load_writer_config
from prose_writer.exceptions import ConfigurationError, ProseWriterError, ValidationError
from prose_writer.formatters import InlineFormatters
from prose_writer.fragments import Plain, SupportsRender, Trusted
from prose_writer.lists import ListBuilder
from prose_writer.markdown import bold, code, image, inline, italic, link, strike
from prose_writer.schema import SchemaEmbedOptions
from prose_writer.validation import (
    OutputFormat,
    OutputValidator,
    ValidationIssue,
    ValidationOptions,
    ValidationResult,
    create_json_schema_validator,
    create_pydantic_validator,
    create_yaml_parser_adapter,
)
from prose_writer.writer import CalloutKind, ProseWriter, WriteFactory, write

safe_write = write.safe

__all__ = [
    # Writer
    "ProseWriter",
    "WriteFactory",
    "write",
    "safe_write",
    "ListBuilder",
    "CalloutKind",
    "InlineFormatters",
    # Inline formatters
    "bold",
    "italic",
    "code",
    "inline",
    "strike",
    "link",
    "image",
    # Fragments
    "Trusted",
    "Plain",
    "SupportsRender",
    # Validation
    "OutputFormat",
    "OutputValidator",
    "ValidationIssue",
    "ValidationOptions",
    "ValidationResult",
    "SchemaEmbedOptions",
    "create_json_schema_validator",
    "create_pydantic_validator",
    "create_yaml_parser_adapter",
    # Config
    "WriterConfig",
    "load_writer_config",
    # Exceptions
    "ProseWriterError",
    "ConfigurationError",
    "ValidationError",
]
