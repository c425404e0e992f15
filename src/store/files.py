"""JSON file repository for architecture graphs."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import TYPE_CHECKING

import orjson
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from graph.model import check_schema_version, ensure_graph

if TYPE_CHECKING:
    from pathlib import Path

    from graph.model import ArchitectureGraph

logger = logging.getLogger(__name__)

_GRAPH_ID = re.compile(r"^[A-Za-z0-9_.-]+$")


class GraphNotFoundError(KeyError):
    """Raised when no graph is stored under the requested id."""


class GraphSummary(BaseModel):
    """Listing entry for a stored graph."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    version: str
    modified: datetime
    node_count: int
    edge_count: int


def dump_graph(graph: ArchitectureGraph) -> bytes:
    """Serialize a graph to the canonical interchange JSON."""
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    return orjson.dumps(graph.to_dict(), option=opts)


def parse_graph(raw: bytes | str) -> ArchitectureGraph:
    """Parse interchange JSON, checking the schema version first.

    Raises:
        orjson.JSONDecodeError: If ``raw`` is not JSON.
        GraphStructureError: If the document is not a graph.
        SchemaVersionError: If the schema major version is unsupported.
    """
    data = orjson.loads(raw)
    if isinstance(data, dict):
        metadata = data.get("metadata")
        if isinstance(metadata, dict) and isinstance(metadata.get("version"), str):
            check_schema_version(metadata["version"])
    return ensure_graph(data)


class JsonFileGraphRepository:
    """Stores each graph as ``<metadata.id>.json`` in one directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def _path(self, graph_id: str) -> Path:
        if not _GRAPH_ID.match(graph_id) or graph_id in {".", ".."}:
            msg = f"Invalid graph id '{graph_id}'"
            raise ValueError(msg)
        return self.directory / f"{graph_id}.json"

    def save(self, graph: ArchitectureGraph) -> None:
        graph = ensure_graph(graph)
        path = self._path(graph.metadata.id)
        self.directory.mkdir(parents=True, exist_ok=True)
        path.write_bytes(dump_graph(graph))
        logger.info("saved graph %s to %s", graph.metadata.id, path)

    def load(self, graph_id: str) -> ArchitectureGraph:
        path = self._path(graph_id)
        try:
            raw = path.read_bytes()
        except FileNotFoundError as exc:
            msg = f"No graph stored with id '{graph_id}'"
            raise GraphNotFoundError(msg) from exc
        graph = parse_graph(raw)
        logger.debug("loaded graph %s from %s", graph_id, path)
        return graph

    def list(self) -> list[GraphSummary]:
        if not self.directory.is_dir():
            return []
        summaries: list[GraphSummary] = []
        for path in sorted(self.directory.glob("*.json")):
            if not _GRAPH_ID.match(path.stem):
                logger.warning("skipping %s: not a valid graph id", path.name)
                continue
            graph = self.load(path.stem)
            summaries.append(
                GraphSummary(
                    id=path.stem,
                    name=graph.metadata.name,
                    version=graph.metadata.version,
                    modified=graph.metadata.modified,
                    node_count=len(graph.nodes),
                    edge_count=len(graph.edges),
                )
            )
        return summaries

    def delete(self, graph_id: str) -> None:
        path = self._path(graph_id)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            msg = f"No graph stored with id '{graph_id}'"
            raise GraphNotFoundError(msg) from exc
        logger.info("deleted graph %s", graph_id)


__all__ = [
    "GraphNotFoundError",
    "GraphSummary",
    "JsonFileGraphRepository",
    "dump_graph",
    "parse_graph",
]
