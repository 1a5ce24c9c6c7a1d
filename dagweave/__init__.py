"""dagweave: an in-memory directed acyclic graph over keyed records.

Records are plain mappings identified by a configurable unique-key field.
Edges may repeat, lineage queries list a node once per path, and removing a
vertex reconnects its parents to its children.
"""

# Version is defined in pyproject.toml and read dynamically
try:
    from importlib.metadata import version

    __version__ = version("dagweave")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for source checkouts

from dagweave.core.config import DagweaveConfig, GraphConfig, LoggingConfig, load_config
from dagweave.core.domain import Direction, DirectedAcyclicGraph, Node
from dagweave.core.exceptions import (
    ConfigurationError,
    CycleDetectedError,
    DagweaveError,
    GraphError,
    GraphFileError,
    ValidationError,
)
from dagweave.core.logging import configure_logging, get_logger

__all__ = [
    "__version__",
    "ConfigurationError",
    "CycleDetectedError",
    "DagweaveConfig",
    "DagweaveError",
    "Direction",
    "DirectedAcyclicGraph",
    "GraphConfig",
    "GraphError",
    "GraphFileError",
    "LoggingConfig",
    "Node",
    "ValidationError",
    "configure_logging",
    "get_logger",
    "load_config",
]
