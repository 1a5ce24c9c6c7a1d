"""TOML configuration loader for dagweave."""

from __future__ import annotations

import os
import re
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from dagweave.core.config.models import DagweaveConfig, GraphConfig, LoggingConfig
from dagweave.core.exceptions import ConfigurationError, ValidationError
from dagweave.core.logging import get_logger

# Constants for boolean environment variable parsing
_TRUTHY_VALUES = frozenset({"true", "1", "yes", "on", "enabled"})
_FALSY_VALUES = frozenset({"false", "0", "no", "off", "disabled"})

_GRAPH_FIELDS = frozenset(GraphConfig.__dataclass_fields__)
_LOGGING_FIELDS = frozenset(LoggingConfig.__dataclass_fields__)

logger = get_logger(__name__)


def _parse_bool(value: object) -> bool:
    """Parse a boolean from a TOML value or environment variable.

    Raises
    ------
    ValueError
        If value is not a recognized boolean string

    Examples
    --------
    >>> _parse_bool("Yes"), _parse_bool("off"), _parse_bool(True)
    (True, False, True)
    """
    if isinstance(value, bool):
        return value
    normalized = str(value).lower().strip()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSY_VALUES:
        return False
    expected = sorted(_TRUTHY_VALUES | _FALSY_VALUES)
    raise ValueError(f"Invalid boolean value: {value!r}. Expected one of: {expected}")


class ConfigLoader:
    """Loads dagweave configuration from TOML files."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def load_from_toml(self, path: str | Path | None = None) -> DagweaveConfig:
        """Load configuration from a TOML file.

        Parameters
        ----------
        path : str | Path | None
            Path to TOML file. If None, searches for dagweave.toml or
            pyproject.toml

        Returns
        -------
        DagweaveConfig
            Parsed configuration with environment variables substituted

        Raises
        ------
        FileNotFoundError
            If no configuration file is found
        ConfigurationError
            If the file is not valid TOML or holds invalid settings
        """
        config_path = self._find_config_file(path)
        return self._load_and_parse(config_path)

    def _load_and_parse(self, config_path: Path) -> DagweaveConfig:
        logger.debug("Loading configuration from {path}", path=config_path)

        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(str(config_path), f"invalid TOML: {e}") from e

        if config_path.name == "pyproject.toml":
            section = data.get("tool", {}).get("dagweave", {})
            if not section:
                logger.debug("No [tool.dagweave] section found in pyproject.toml, using defaults")
        elif "tool" in data and "dagweave" in data.get("tool", {}):
            section = data["tool"]["dagweave"]
        else:
            section = data

        section = self._substitute_env_vars(section)
        return self._parse_config(section, str(config_path))

    def _find_config_file(self, path: str | Path | None) -> Path:
        """Find the configuration file.

        Search order: explicit path, ``DAGWEAVE_CONFIG_PATH``, then
        ``dagweave.toml``, ``pyproject.toml`` and ``.dagweave.toml`` in the
        working directory, then any parent ``pyproject.toml`` with a
        ``[tool.dagweave]`` section.
        """
        if path:
            config_path = Path(path)
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return config_path

        if env_path := os.getenv("DAGWEAVE_CONFIG_PATH"):
            config_path = Path(env_path)
            if config_path.exists():
                return config_path
            logger.warning("DAGWEAVE_CONFIG_PATH set but file not found: {path}", path=config_path)

        for search_path in (Path("dagweave.toml"), Path("pyproject.toml"), Path(".dagweave.toml")):
            if search_path.exists():
                return search_path

        current = Path.cwd()
        while current != current.parent:
            pyproject = current / "pyproject.toml"
            if pyproject.exists():
                try:
                    with pyproject.open("rb") as f:
                        data = tomllib.load(f)
                except tomllib.TOMLDecodeError as e:
                    raise ConfigurationError(str(pyproject), f"invalid TOML: {e}") from e
                if "dagweave" in data.get("tool", {}):
                    return pyproject
            current = current.parent

        raise FileNotFoundError(
            "No configuration file found. Searched for: dagweave.toml, pyproject.toml, "
            ".dagweave.toml"
        )

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively replace ``${VAR}`` placeholders with environment values.

        Unknown variables keep their placeholder.
        """
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                value = os.environ.get(match.group(1))
                if value is None:
                    logger.debug(
                        "Environment variable {name} not found, keeping placeholder",
                        name=match.group(1),
                    )
                    return match.group(0)
                return value

            return self.ENV_VAR_PATTERN.sub(replacer, data)

        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}

        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]

        return data

    def _parse_config(self, data: dict[str, Any], source: str = "<defaults>") -> DagweaveConfig:
        """Build a DagweaveConfig from the ``graph`` and ``logging`` sections."""
        graph_data = dict(data.get("graph", {}))
        logging_data = dict(data.get("logging", {}))

        for name, section, allowed in (
            ("graph", graph_data, _GRAPH_FIELDS),
            ("logging", logging_data, _LOGGING_FIELDS),
        ):
            if unknown := sorted(set(section) - allowed):
                raise ConfigurationError(source, f"unknown [{name}] option(s): {unknown}")

        try:
            graph_config = self._parse_graph_config(graph_data)
            logging_config = self._parse_logging_config(logging_data)
        except (ValueError, ValidationError) as e:
            raise ConfigurationError(source, str(e)) from e

        return DagweaveConfig(graph=graph_config, logging=logging_config)

    def _parse_graph_config(self, graph_data: dict[str, Any]) -> GraphConfig:
        """Parse graph settings; ``DAGWEAVE_CHECK_CYCLES`` and ``DAGWEAVE_DEBUG`` win."""
        check_cycles = _parse_bool(graph_data.get("check_cycles", False))
        debug = _parse_bool(graph_data.get("debug", False))

        if env_check := os.getenv("DAGWEAVE_CHECK_CYCLES"):
            check_cycles = _parse_bool(env_check)
        if env_debug := os.getenv("DAGWEAVE_DEBUG"):
            debug = _parse_bool(env_debug)

        return GraphConfig(
            unique_key=str(graph_data.get("unique_key", "id")),
            description_key=str(graph_data.get("description_key", "text")),
            check_cycles=check_cycles,
            debug=debug,
        )

    def _parse_logging_config(self, logging_data: dict[str, Any]) -> LoggingConfig:
        """Parse logging settings with environment variable overrides.

        - DAGWEAVE_LOG_LEVEL: log level
        - DAGWEAVE_LOG_FORMAT: output format
        - DAGWEAVE_LOG_FILE: optional file path for JSON output
        """
        level = str(logging_data.get("level", "INFO")).upper()
        format_type = str(logging_data.get("format", "structured")).lower()
        output_file = logging_data.get("output_file")

        if env_level := os.getenv("DAGWEAVE_LOG_LEVEL"):
            level = env_level.upper()
        if env_format := os.getenv("DAGWEAVE_LOG_FORMAT"):
            format_type = env_format.lower()
        if env_file := os.getenv("DAGWEAVE_LOG_FILE"):
            output_file = env_file

        return LoggingConfig(
            level=level,  # type: ignore[arg-type]
            format=format_type,  # type: ignore[arg-type]
            output_file=output_file,
            use_color=_parse_bool(logging_data.get("use_color", True)),
            include_timestamp=_parse_bool(logging_data.get("include_timestamp", True)),
        )


@lru_cache(maxsize=32)
def _cached_load_config(path_str: str | None) -> DagweaveConfig:
    try:
        return ConfigLoader().load_from_toml(Path(path_str) if path_str else None)
    except FileNotFoundError:
        logger.debug("No configuration file found, using defaults")
        return get_default_config()


def load_config(path: str | Path | None = None) -> DagweaveConfig:
    """Load configuration from TOML or return defaults (cached per path).

    Parameters
    ----------
    path : str | Path | None
        Explicit file, or None to search the usual locations

    Returns
    -------
    DagweaveConfig
        Loaded configuration, or defaults if no file exists
    """
    return _cached_load_config(str(path) if path else None)


def clear_config_cache() -> None:
    """Forget cached configurations so the next load re-reads the files."""
    _cached_load_config.cache_clear()


def get_default_config() -> DagweaveConfig:
    """Default configuration with environment overrides applied."""
    return ConfigLoader()._parse_config({})
