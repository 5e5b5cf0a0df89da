"""prose-writer exception hierarchy.

Usage:
    from prose_writer.exceptions import ValidationError

    try:
        writer.json(payload, validate=validator, schema=schema)
    except ValidationError as e:
        for issue in e.issues:
            print(issue.path, issue.message)
    except ProseWriterError as e:
        print(f"prose-writer error: {e}")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prose_writer.validation import OutputFormat, ValidationIssue


class ProseWriterError(Exception):
    """Base exception for all prose-writer errors.

    All library-specific exceptions inherit from this class, allowing
    callers to catch every prose-writer error with a single except clause.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# Configuration Errors


class ConfigurationError(ProseWriterError):
    """Error in prose-writer configuration.

    Raised when a config file is not valid YAML or contains values
    rejected by WriterConfig.
    """

    pass


# Validation Errors


class ValidationError(ProseWriterError):
    """Structured output failed validation.

    Raised by json()/yaml() when the injected validator reports invalid
    data, or when string input cannot be parsed before validation.
    Nothing is appended to the writer when this is raised.
    """

    def __init__(
        self,
        format: OutputFormat,
        issues: list[ValidationIssue],
        label: str | None = None,
    ) -> None:
        self.format = format
        self.issues = issues
        self.label = label

        title = label or f"{format.upper()} validation failed"
        lines = [title]
        for index, issue in enumerate(issues, start=1):
            if issue.path:
                lines.append(f"{index}. {issue.path}: {issue.message}")
            else:
                lines.append(f"{index}. {issue.message}")
        super().__init__("\n".join(lines))
