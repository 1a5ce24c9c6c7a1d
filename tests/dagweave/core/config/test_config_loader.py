"""Tests for the TOML configuration loader."""

import pytest

from dagweave.core.config import (
    ConfigLoader,
    DagweaveConfig,
    GraphConfig,
    LoggingConfig,
    clear_config_cache,
    get_default_config,
    load_config,
)
from dagweave.core.exceptions import ConfigurationError, ValidationError


class TestModels:
    """Test the configuration dataclasses."""

    def test_defaults(self):
        """Test default values."""
        config = DagweaveConfig()
        assert config.graph == GraphConfig()
        assert config.graph.unique_key == "id"
        assert config.graph.description_key == "text"
        assert config.graph.check_cycles is False
        assert config.logging.level == "INFO"
        assert config.logging.format == "structured"

    def test_frozen(self):
        """Test configs are immutable."""
        with pytest.raises(AttributeError):
            GraphConfig().unique_key = "other"  # type: ignore[misc]

    def test_empty_key_rejected(self):
        """Test empty field names fail validation."""
        with pytest.raises(ValidationError, match="description_key"):
            GraphConfig(description_key="")

    def test_invalid_log_level(self):
        """Test unknown log levels fail validation."""
        with pytest.raises(ValidationError, match="level"):
            LoggingConfig(level="LOUD")  # type: ignore[arg-type]


class TestConfigLoader:
    """Test loading configuration files."""

    def test_load_dagweave_toml(self, tmp_path):
        """Test a standalone dagweave.toml."""
        config_file = tmp_path / "dagweave.toml"
        config_file.write_text(
            """
[graph]
unique_key = "letter"
check_cycles = true

[logging]
level = "debug"
format = "json"
"""
        )
        config = ConfigLoader().load_from_toml(config_file)
        assert config.graph.unique_key == "letter"
        assert config.graph.check_cycles is True
        assert config.logging.level == "DEBUG"
        assert config.logging.format == "json"

    def test_load_pyproject_section(self, tmp_path):
        """Test the [tool.dagweave] section of pyproject.toml."""
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text(
            """
[project]
name = "demo"

[tool.dagweave.graph]
description_key = "label"
debug = "yes"
"""
        )
        config = ConfigLoader().load_from_toml(config_file)
        assert config.graph.description_key == "label"
        assert config.graph.debug is True

    def test_pyproject_without_section_uses_defaults(self, tmp_path):
        """Test a pyproject.toml without our section yields defaults."""
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text('[project]\nname = "demo"\n')
        assert ConfigLoader().load_from_toml(config_file) == DagweaveConfig()

    def test_missing_explicit_file(self, tmp_path):
        """Test an explicit path that does not exist."""
        with pytest.raises(FileNotFoundError):
            ConfigLoader().load_from_toml(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path):
        """Test malformed TOML is reported as a configuration error."""
        config_file = tmp_path / "dagweave.toml"
        config_file.write_text("[graph\nunique_key = ")
        with pytest.raises(ConfigurationError, match="invalid TOML"):
            ConfigLoader().load_from_toml(config_file)

    def test_unknown_option(self, tmp_path):
        """Test unknown keys are rejected."""
        config_file = tmp_path / "dagweave.toml"
        config_file.write_text('[graph]\nunique = "id"\n')
        with pytest.raises(ConfigurationError, match="unknown \\[graph\\] option"):
            ConfigLoader().load_from_toml(config_file)

    def test_invalid_boolean(self, tmp_path):
        """Test unparseable booleans are configuration errors."""
        config_file = tmp_path / "dagweave.toml"
        config_file.write_text('[graph]\ncheck_cycles = "maybe"\n')
        with pytest.raises(ConfigurationError, match="Invalid boolean"):
            ConfigLoader().load_from_toml(config_file)

    def test_invalid_format(self, tmp_path):
        """Test validation errors become configuration errors."""
        config_file = tmp_path / "dagweave.toml"
        config_file.write_text('[logging]\nformat = "xml"\n')
        with pytest.raises(ConfigurationError, match="format"):
            ConfigLoader().load_from_toml(config_file)

    def test_env_var_substitution(self, tmp_path, monkeypatch):
        """Test ${VAR} placeholders are substituted."""
        monkeypatch.setenv("GRAPH_KEY", "slug")
        config_file = tmp_path / "dagweave.toml"
        config_file.write_text('[graph]\nunique_key = "${GRAPH_KEY}"\n')
        assert ConfigLoader().load_from_toml(config_file).graph.unique_key == "slug"

    def test_unknown_env_var_keeps_placeholder(self, tmp_path, monkeypatch):
        """Test unknown variables are left as written."""
        monkeypatch.delenv("DAGWEAVE_TEST_UNSET", raising=False)
        config_file = tmp_path / "dagweave.toml"
        config_file.write_text('[graph]\nunique_key = "${DAGWEAVE_TEST_UNSET}"\n')
        config = ConfigLoader().load_from_toml(config_file)
        assert config.graph.unique_key == "${DAGWEAVE_TEST_UNSET}"

    def test_env_overrides(self, tmp_path, monkeypatch):
        """Test DAGWEAVE_* variables win over the file."""
        monkeypatch.setenv("DAGWEAVE_CHECK_CYCLES", "off")
        monkeypatch.setenv("DAGWEAVE_LOG_LEVEL", "warning")
        monkeypatch.setenv("DAGWEAVE_LOG_FILE", str(tmp_path / "dag.log"))
        config_file = tmp_path / "dagweave.toml"
        config_file.write_text("[graph]\ncheck_cycles = true\n")

        config = ConfigLoader().load_from_toml(config_file)

        assert config.graph.check_cycles is False
        assert config.logging.level == "WARNING"
        assert config.logging.output_file == str(tmp_path / "dag.log")

    def test_discovers_file_in_working_directory(self, tmp_path, monkeypatch):
        """Test dagweave.toml is found in the working directory."""
        (tmp_path / "dagweave.toml").write_text('[graph]\nunique_key = "found"\n')
        monkeypatch.chdir(tmp_path)
        assert ConfigLoader().load_from_toml().graph.unique_key == "found"

    def test_malformed_parent_pyproject(self, tmp_path, monkeypatch):
        """Test a broken pyproject.toml above the working directory is a configuration error."""
        (tmp_path / "pyproject.toml").write_text("[tool.dagweave\n")
        workdir = tmp_path / "project"
        workdir.mkdir()
        monkeypatch.chdir(workdir)

        with pytest.raises(ConfigurationError, match="invalid TOML"):
            ConfigLoader().load_from_toml()

    def test_config_path_env_var(self, tmp_path, monkeypatch):
        """Test DAGWEAVE_CONFIG_PATH points at the file to load."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text('[graph]\nunique_key = "custom"\n')
        monkeypatch.setenv("DAGWEAVE_CONFIG_PATH", str(config_file))
        monkeypatch.chdir(tmp_path)
        assert ConfigLoader().load_from_toml().graph.unique_key == "custom"


class TestLoadConfig:
    """Test the cached entry point."""

    def test_defaults_when_no_file(self, tmp_path, monkeypatch):
        """Test defaults are returned when nothing is found."""
        monkeypatch.chdir(tmp_path)
        assert load_config() == get_default_config()

    def test_cached_until_cleared(self, tmp_path):
        """Test repeated loads reuse the cached result."""
        config_file = tmp_path / "dagweave.toml"
        config_file.write_text('[graph]\nunique_key = "first"\n')
        first = load_config(config_file)

        config_file.write_text('[graph]\nunique_key = "second"\n')
        assert load_config(config_file) is first

        clear_config_cache()
        assert load_config(config_file).graph.unique_key == "second"

    def test_default_config_honours_env(self, monkeypatch):
        """Test defaults pick up environment overrides."""
        monkeypatch.setenv("DAGWEAVE_DEBUG", "1")
        assert get_default_config().graph.debug is True
