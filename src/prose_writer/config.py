"""Writer configuration schema and loading."""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from prose_writer.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class WriterConfig(BaseModel):
    """Rendering defaults shared by a writer and every child it spawns.

    Loaded from a YAML file, optionally under a 'prose_writer:' section.
    Values not present in the file keep their defaults.
    """

    json_indent: int = Field(default=2, ge=0, description="Indentation for serialized JSON")
    yaml_sort_keys: bool = Field(
        default=False, description="Sort mapping keys when serializing YAML"
    )
    chars_per_token: int = Field(
        default=4, ge=1, description="Characters per token for the default estimate"
    )
    allowed_url_schemes: list[str] = Field(
        default_factory=lambda: ["http", "https", "mailto"],
        description="URL schemes kept by safe-mode links and images",
    )
    url_placeholder: str = Field(
        default="#", description="Destination substituted for rejected URLs"
    )


DEFAULT_CONFIG = WriterConfig()


def load_writer_config(path: Path) -> WriterConfig:
    """Load writer configuration from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        WriterConfig with values from file or defaults

    Raises:
        ConfigurationError: If the file is not valid YAML or has invalid values

    Example:
        config = load_writer_config(Path("prose-writer.yaml"))
        writer = ProseWriter(config=config)
    """
    if not path.exists():
        return WriterConfig()

    try:
        with open(path) as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    logger.debug("Loaded writer config from %s", path)

    if raw_config is None:
        return WriterConfig()
    if not isinstance(raw_config, dict):
        raise ConfigurationError(f"Invalid writer config in {path}: expected a mapping")

    section = raw_config.get("prose_writer", raw_config) or {}

    try:
        return WriterConfig.model_validate(section)
    except Exception as e:
        raise ConfigurationError(f"Invalid writer config in {path}: {e}") from e
