"""Validation bridge for structured (JSON/YAML) output.

Validation is pluggable: callers inject a validator with the contract
``validate(format, data, schema) -> ValidationResult``. This module
normalizes string vs. parsed input before handing it over, and turns a
negative result into prose_writer.exceptions.ValidationError.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console

from prose_writer.exceptions import ValidationError

logger = logging.getLogger(__name__)

OutputFormat = Literal["json", "yaml"]


class ValidationIssue(BaseModel):
    """A single problem reported by a validator."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(..., description="Human-readable description")
    path: str | None = Field(default=None, description="Location of the problem, if known")

    @field_validator("path", mode="before")
    @classmethod
    def _join_path(cls, value: Any) -> Any:
        # jsonschema reports paths as deques, other validators as lists or ints
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, Iterable):
            return ".".join(str(part) for part in value) or None
        return str(value)


class ValidationResult(BaseModel):
    """Result of validating structured output.

    Attributes:
        valid: Whether the data passed validation
        issues: Problems found (empty when valid)
    """

    valid: bool = Field(..., description="Whether validation passed")
    issues: list[ValidationIssue] = Field(default_factory=list, description="Reported problems")

    @field_validator("issues", mode="before")
    @classmethod
    def _coerce_issues(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"message": item} if isinstance(item, str) else item for item in value]
        return value

    def format(self) -> str:
        """Format the result for display with Rich.

        Returns:
            Formatted string suitable for Rich console output
        """
        lines: list[str] = []

        if self.valid:
            lines.append("[green]✓[/green] Validation passed")
        else:
            lines.append("[red]✗[/red] Validation failed")

        for issue in self.issues:
            location = f"[bold]{issue.path}[/bold]: " if issue.path else ""
            lines.append(f"  [red]•[/red] {location}{issue.message}")

        return "\n".join(lines)

    def print(self) -> None:
        """Print formatted validation result to console."""
        console = Console()
        console.print(self.format())


OutputValidator = Callable[[OutputFormat, Any, Any], Any]
YamlParser = Callable[[str], Any]


class ValidationOptions(BaseModel):
    """Options accepted by json()/yaml().

    ``schema`` and ``validate`` are exposed under those names; the
    attributes carry a trailing underscore to avoid BaseModel members.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    schema_: Any = Field(default=None, alias="schema", description="Schema handed to the validator")
    validate_: OutputValidator | None = Field(
        default=None, alias="validate", description="Validator; no validation when absent"
    )
    label: str | None = Field(default=None, description="Heading used in error messages")
    parse_yaml: YamlParser | None = Field(
        default=None, description="Parser applied to YAML string input before validation"
    )


def normalize_result(result: Any) -> ValidationResult:
    """Coerce a validator's return value into a ValidationResult.

    Accepts a ValidationResult, a bool, or a mapping shaped like
    ``{"valid": ..., "issues": [...]}`` (issues may be plain strings).
    """
    if isinstance(result, ValidationResult):
        return result
    if isinstance(result, bool):
        return ValidationResult(valid=result)
    if isinstance(result, Mapping):
        return ValidationResult.model_validate(dict(result))
    raise TypeError(f"Unsupported validator result: {type(result).__name__}")


def validate_output(
    format: OutputFormat, data: Any, options: ValidationOptions | None = None
) -> None:
    """Run the configured validator, raising ValidationError on failure.

    String input is parsed first: JSON with the standard library, YAML
    with ``options.parse_yaml`` when given (otherwise the raw string is
    validated). A parse failure is a validation failure.
    """
    if options is None or options.validate_ is None:
        return

    logger.debug("Validating %s output (label=%r)", format, options.label)

    value = data
    if isinstance(data, str):
        if format == "json":
            try:
                value = json.loads(data)
            except json.JSONDecodeError as e:
                logger.debug("JSON input failed to parse: %s", e)
                issue = ValidationIssue(
                    message=f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})"
                )
                raise ValidationError(format, [issue], options.label) from e
        elif options.parse_yaml is not None:
            try:
                value = options.parse_yaml(data)
            except Exception as e:
                logger.debug("YAML input failed to parse: %s", e)
                issue = ValidationIssue(message=f"Invalid YAML: {e}")
                raise ValidationError(format, [issue], options.label) from e

    result = normalize_result(options.validate_(format, value, options.schema_))
    if not result.valid:
        issues = result.issues or [ValidationIssue(message="Validator reported invalid data")]
        raise ValidationError(format, issues, options.label)


def create_json_schema_validator(check: Callable[[Any, Any], Any]) -> OutputValidator:
    """Adapt a ``check(data, schema)`` callable to the validator contract.

    Example:
        from jsonschema import Draft202012Validator

        def check(data, schema):
            errors = list(Draft202012Validator(schema).iter_errors(data))
            return {"valid": not errors, "issues": [e.message for e in errors]}

        writer.json(payload, schema=schema, validate=create_json_schema_validator(check))
    """

    def validator(format: OutputFormat, data: Any, schema: Any) -> ValidationResult:
        return normalize_result(check(data, schema))

    return validator


def create_pydantic_validator(model: type[BaseModel] | None = None) -> OutputValidator:
    """Validator backed by a pydantic model.

    Uses ``model`` when given, otherwise the schema passed at call time
    (which must then be a BaseModel subclass).
    """

    def validator(format: OutputFormat, data: Any, schema: Any) -> ValidationResult:
        target = model or schema
        if not (isinstance(target, type) and issubclass(target, BaseModel)):
            return ValidationResult(
                valid=False,
                issues=[ValidationIssue(message="No pydantic model to validate against")],
            )
        try:
            target.model_validate(data)
        except PydanticValidationError as e:
            issues = [
                ValidationIssue(
                    message=error["msg"],
                    path=".".join(str(part) for part in error["loc"]) or None,
                )
                for error in e.errors()
            ]
            return ValidationResult(valid=False, issues=issues)
        return ValidationResult(valid=True)

    return validator


def create_yaml_parser_adapter(load: YamlParser | None = None) -> YamlParser:
    """Wrap a YAML loader (default: PyYAML safe_load) as a parse_yaml function."""
    loader = load or yaml.safe_load

    def parse(text: str) -> Any:
        return loader(text)

    return parse
