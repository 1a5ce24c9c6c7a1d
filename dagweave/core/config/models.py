"""Configuration data models for dagweave."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from dagweave.core.exceptions import ValidationError

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("console", "json", "structured", "rich")


@dataclass(frozen=True, slots=True)
class GraphConfig:
    """Settings for a :class:`~dagweave.core.domain.dag.DirectedAcyclicGraph`.

    Attributes
    ----------
    unique_key : str, default="id"
        Record field holding the vertex key
    description_key : str, default="text"
        Record field shown by the text rendering
    check_cycles : bool, default=False
        Reject edges that would close a cycle
    debug : bool, default=False
        Log graph diagnostics at INFO instead of DEBUG

    Examples
    --------
    TOML configuration:

    ```toml
    [tool.dagweave.graph]
    unique_key = "letter"
    check_cycles = true
    ```
    """

    unique_key: str = "id"
    description_key: str = "text"
    check_cycles: bool = False
    debug: bool = False

    def __post_init__(self) -> None:
        """Validate field names.

        Raises
        ------
        ValidationError
            If a field name is empty
        """
        if not self.unique_key:
            raise ValidationError("unique_key", "cannot be empty")
        if not self.description_key:
            raise ValidationError("description_key", "cannot be empty")


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration for dagweave.

    Attributes
    ----------
    level : str, default="INFO"
        Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write JSON logs to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output

    Examples
    --------
    Environment variable overrides:

    ```bash
    export DAGWEAVE_LOG_LEVEL=DEBUG
    export DAGWEAVE_LOG_FORMAT=rich
    export DAGWEAVE_LOG_FILE=/var/log/dagweave.log
    ```
    """

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True

    def __post_init__(self) -> None:
        """Validate level and format.

        Raises
        ------
        ValidationError
            If level or format is not recognised
        """
        if self.level not in _LOG_LEVELS:
            raise ValidationError("level", f"must be one of {', '.join(_LOG_LEVELS)}", self.level)
        if self.format not in _LOG_FORMATS:
            raise ValidationError(
                "format", f"must be one of {', '.join(_LOG_FORMATS)}", self.format
            )


@dataclass(frozen=True, slots=True)
class DagweaveConfig:
    """Top-level configuration: graph settings plus logging."""

    graph: GraphConfig = field(default_factory=GraphConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
