"""dagweave core: graph domain, configuration, logging and errors."""

from dagweave.core.domain import Direction, DirectedAcyclicGraph, Node
from dagweave.core.exceptions import (
    ConfigurationError,
    CycleDetectedError,
    DagweaveError,
    GraphError,
    GraphFileError,
    ValidationError,
)

__all__ = [
    "ConfigurationError",
    "CycleDetectedError",
    "DagweaveError",
    "Direction",
    "DirectedAcyclicGraph",
    "GraphError",
    "GraphFileError",
    "Node",
    "ValidationError",
]
