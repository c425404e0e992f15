"""Graph persistence and the in-memory editing store."""

from store.files import (
    GraphNotFoundError,
    GraphSummary,
    JsonFileGraphRepository,
    dump_graph,
    parse_graph,
)
from store.memory import ArchitectureViolationError, InMemoryGraphStore

__all__ = [
    "ArchitectureViolationError",
    "GraphNotFoundError",
    "GraphSummary",
    "InMemoryGraphStore",
    "JsonFileGraphRepository",
    "dump_graph",
    "parse_graph",
]
