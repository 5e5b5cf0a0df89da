"""Tests for writer configuration."""

from pathlib import Path

import pytest

from prose_writer import ConfigurationError, ProseWriter, WriterConfig, load_writer_config, write


class TestLoadWriterConfig:
    """Tests for load_writer_config()."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        assert load_writer_config(tmp_path / "missing.yaml") == WriterConfig()

    def test_defaults(self) -> None:
        config = WriterConfig()
        assert config.json_indent == 2
        assert config.yaml_sort_keys is False
        assert config.chars_per_token == 4
        assert config.allowed_url_schemes == ["http", "https", "mailto"]
        assert config.url_placeholder == "#"

    def test_section(self, config_file: Path) -> None:
        config_file.write_text("prose_writer:\n  json_indent: 4\n  url_placeholder: about:blank\n")
        config = load_writer_config(config_file)
        assert config.json_indent == 4
        assert config.url_placeholder == "about:blank"
        assert config.chars_per_token == 4

    def test_top_level_keys(self, config_file: Path) -> None:
        config_file.write_text("yaml_sort_keys: true\nallowed_url_schemes: [https]\n")
        config = load_writer_config(config_file)
        assert config.yaml_sort_keys is True
        assert config.allowed_url_schemes == ["https"]

    def test_empty_file(self, config_file: Path) -> None:
        config_file.write_text("")
        assert load_writer_config(config_file) == WriterConfig()

    def test_empty_section(self, config_file: Path) -> None:
        config_file.write_text("prose_writer:\n")
        assert load_writer_config(config_file) == WriterConfig()

    def test_invalid_yaml(self, config_file: Path) -> None:
        config_file.write_text("json_indent: [2\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_writer_config(config_file)

    def test_not_a_mapping(self, config_file: Path) -> None:
        config_file.write_text("- json_indent\n")
        with pytest.raises(ConfigurationError, match="expected a mapping"):
            load_writer_config(config_file)

    def test_invalid_value(self, config_file: Path) -> None:
        config_file.write_text("json_indent: -1\n")
        with pytest.raises(ConfigurationError, match="Invalid writer config"):
            load_writer_config(config_file)


class TestWriterUsesConfig:
    """Tests for config flowing into rendering."""

    def test_json_indent(self) -> None:
        writer = ProseWriter(config=WriterConfig(json_indent=4))
        assert writer.json({"a": 1}).render() == '```json\n{\n    "a": 1\n}\n```\n\n'

    def test_yaml_key_order(self) -> None:
        data = {"b": 1, "a": 2}
        assert ProseWriter().yaml(data).render() == "```yaml\nb: 1\na: 2\n```\n\n"
        sorted_writer = ProseWriter(config=WriterConfig(yaml_sort_keys=True))
        assert sorted_writer.yaml(data).render() == "```yaml\na: 2\nb: 1\n```\n\n"

    def test_children_inherit_config(self) -> None:
        config = WriterConfig(json_indent=0)
        writer = ProseWriter("x", config=config)
        assert writer.clone().config is config
        assert writer.trim().config is config
        assert writer.fill({}).config is config

    def test_section_child_inherits_config(self) -> None:
        config = WriterConfig(json_indent=0)
        writer = ProseWriter(config=config).section("Data", lambda w: w.json([1]))
        assert writer.render() == "## Data\n\n```json\n[\n1\n]\n```\n\n"

    def test_configured_factory(self) -> None:
        config = WriterConfig(chars_per_token=1)
        factory = write.configured(config)
        assert factory("ab").config is config
        assert factory("ab").tokens() == 3
        assert factory.safe("x").config is config
