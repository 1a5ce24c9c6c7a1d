"""Core exception hierarchy for dagweave.

All dagweave exceptions inherit from DagweaveError so callers can catch the
whole family at once. Removing an edge or a vertex that does not exist is not
an error and never raises; those cases only show up on the diagnostic log.
"""

from __future__ import annotations

from pathlib import Path

# ============================================================================
# Base Exception
# ============================================================================


class DagweaveError(Exception):
    """Base exception for all dagweave errors."""

    pass


# ============================================================================
# Configuration & Validation Errors
# ============================================================================


class ConfigurationError(DagweaveError):
    """Raised when configuration is invalid or missing.

    Examples
    --------
    Example usage::

        raise ConfigurationError("dagweave.toml", "unknown log format 'xml'")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the component with invalid configuration
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


class ValidationError(DagweaveError):
    """Raised when a configuration value fails validation.

    Examples
    --------
    Example usage::

        raise ValidationError("unique_key", "cannot be empty")
    """

    def __init__(self, field: str, constraint: str, value: object = None) -> None:
        """Initialize validation error.

        Args
        ----
            field: Name of the field that failed validation
            constraint: Description of the validation constraint
            value: The invalid value (optional)
        """
        if value is not None:
            msg = f"Validation failed for '{field}': {constraint} (got {value!r})"
        else:
            msg = f"Validation failed for '{field}': {constraint}"
        super().__init__(msg)
        self.field = field
        self.constraint = constraint
        self.value = value


# ============================================================================
# Graph Errors
# ============================================================================


class GraphError(DagweaveError):
    """Base exception for graph mutation errors."""

    pass


class CycleDetectedError(GraphError):
    """Raised when adding an edge would close a cycle.

    The graph is left untouched when this is raised.

    Examples
    --------
    >>> err = CycleDetectedError("b", "a")
    >>> str(err)
    'adding edge would create cycle in the graph: "b" -> "a"'
    >>> err.parent_key, err.child_key
    ('b', 'a')
    """

    def __init__(self, parent_key: object, child_key: object) -> None:
        """Initialize cycle error.

        Args
        ----
            parent_key: Key of the would-be parent endpoint
            child_key: Key of the would-be child endpoint
        """
        super().__init__(
            f'adding edge would create cycle in the graph: "{parent_key}" -> "{child_key}"'
        )
        self.parent_key = parent_key
        self.child_key = child_key


class GraphFileError(DagweaveError):
    """Raised when a graph definition file cannot be loaded."""

    def __init__(self, path: str | Path, reason: str) -> None:
        """Initialize graph file error.

        Args
        ----
            path: Path of the offending file
            reason: What went wrong while reading or validating it
        """
        super().__init__(f"Invalid graph file '{path}': {reason}")
        self.path = Path(path)
        self.reason = reason


__all__ = [
    "DagweaveError",
    "ConfigurationError",
    "ValidationError",
    "GraphError",
    "CycleDetectedError",
    "GraphFileError",
]
