"""Shared pytest fixtures for prose-writer tests."""

from pathlib import Path

import pytest
from pydantic import BaseModel

from prose_writer import ProseWriter, ValidationResult


class User(BaseModel):
    """Model used by pydantic validator and schema tests."""

    name: str
    age: int


@pytest.fixture
def writer() -> ProseWriter:
    """An empty plain-mode writer."""
    return ProseWriter()


@pytest.fixture
def safe_writer() -> ProseWriter:
    """An empty safe-mode writer."""
    return ProseWriter(safe=True)


@pytest.fixture
def user_model() -> type[User]:
    return User


@pytest.fixture
def recording_validator() -> tuple[list[tuple[str, object, object]], object]:
    """Validator that records its calls and always passes.

    Returns:
        (calls, validator) where calls collects (format, data, schema)
    """
    calls: list[tuple[str, object, object]] = []

    def validator(format: str, data: object, schema: object) -> ValidationResult:
        calls.append((format, data, schema))
        return ValidationResult(valid=True)

    return calls, validator


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Path for a writer config file inside a temp directory."""
    return tmp_path / "prose-writer.yaml"
