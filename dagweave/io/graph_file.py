"""YAML graph definition files.

A graph file declares optional graph settings, the vertex records, and the
edges between them by key::

    graph:
      unique_key: letter
      check_cycles: true
    vertices:
      - {letter: a, text: "b is my child"}
      - {letter: b, text: "a is my parent"}
    edges:
      - [a, b]
      - {parent: b, child: c}

JSON is valid YAML, so JSON files load the same way.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from dagweave.core.config.models import GraphConfig
from dagweave.core.domain.dag import DirectedAcyclicGraph
from dagweave.core.exceptions import GraphFileError
from dagweave.core.logging import get_logger

logger = get_logger(__name__)

VertexKey = str | int


class GraphSection(BaseModel):
    """Optional ``graph:`` block, mirroring :class:`GraphConfig`."""

    model_config = ConfigDict(extra="forbid")

    unique_key: str = Field(default="id", min_length=1)
    description_key: str = Field(default="text", min_length=1)
    check_cycles: bool = False
    debug: bool = False

    def to_config(self) -> GraphConfig:
        return GraphConfig(**self.model_dump())


class EdgeSpec(BaseModel):
    """One ``parent -> child`` edge, written as ``[parent, child]`` or a mapping."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    parent: VertexKey
    child: VertexKey

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            if len(data) != 2:
                raise ValueError(f"edge must have exactly two keys, got {len(data)}")
            return {"parent": data[0], "child": data[1]}
        return data


class GraphDocument(BaseModel):
    """Parsed contents of a graph file."""

    model_config = ConfigDict(extra="forbid")

    graph: GraphSection = Field(default_factory=GraphSection)
    vertices: list[dict[str, Any]] = Field(default_factory=list)
    edges: list[EdgeSpec] = Field(default_factory=list)


def load_graph_file(path: str | Path) -> GraphDocument:
    """Read and validate a graph file.

    Raises
    ------
    GraphFileError
        If the file cannot be read, is not YAML, or does not match the schema
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise GraphFileError(path, f"cannot read file: {e.strerror or e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise GraphFileError(path, f"invalid YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise GraphFileError(path, f"expected a mapping at top level, got {type(data).__name__}")

    try:
        document = GraphDocument.model_validate(data)
    except PydanticValidationError as e:
        raise GraphFileError(path, str(e)) from e

    logger.debug(
        "Loaded graph file {path} ({vertices} vertices, {edges} edges)",
        path=path,
        vertices=len(document.vertices),
        edges=len(document.edges),
    )
    return document


def build_graph(
    document: GraphDocument,
    config: GraphConfig | None = None,
    source: str | Path = "<document>",
) -> DirectedAcyclicGraph:
    """Create a graph from a parsed document.

    Vertices are added in file order, then edges in file order, so the root
    and adjacency order follow the file.

    Args
    ----
        document: Parsed graph file
        config: Settings overriding the document's ``graph:`` block
        source: Name used in error messages

    Raises
    ------
    GraphFileError
        If a vertex lacks the unique key or an edge names an undeclared vertex
    CycleDetectedError
        If cycle checking is enabled and the edges contain a cycle
    """
    graph = DirectedAcyclicGraph.from_config(config or document.graph.to_config())

    records: dict[Any, dict[str, Any]] = {}
    for position, record in enumerate(document.vertices):
        key = record.get(graph.unique_key)
        if key is None:
            raise GraphFileError(source, f"vertex #{position} has no '{graph.unique_key}' field")
        records.setdefault(key, record)
        graph.add_vertex(record)

    for edge in document.edges:
        missing = [key for key in (edge.parent, edge.child) if key not in records]
        if missing:
            raise GraphFileError(
                source, f"edge {edge.parent} -> {edge.child} names unknown vertices {missing}"
            )
        graph.add_edge(records[edge.parent], records[edge.child])

    return graph
