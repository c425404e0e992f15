from __future__ import annotations

from pathlib import Path

import orjson
import pytest
from pydantic import ValidationError

from graph.model import (
    GRAPH_SCHEMA_VERSION,
    ArchitectureGraph,
    EdgeType,
    GraphNode,
    GraphStructureError,
    LayerType,
    NodeType,
    SchemaVersionError,
    check_schema_version,
    ensure_graph,
    ensure_node,
    require_exhaustive,
)

_FIXTURE = Path(__file__).parent / "fixtures" / "checkout_graph.json"


def _fixture_data() -> dict[str, object]:
    return orjson.loads(_FIXTURE.read_bytes())


def test_ensure_graph_reads_camel_case_interchange_keys() -> None:
    graph = ensure_graph(_fixture_data())

    payment = graph.node_index()["payment"]
    assert payment.type == NodeType.PORT
    assert payment.layer == LayerType.DOMAIN
    assert payment.methods[0].return_type == "Promise<Receipt>"
    assert payment.methods[0].parameters[0].type == "number"
    assert [edge.id for edge in graph.edges] == ["e1", "e2", "e3", "e4", "e5", "e6"]


def test_ensure_graph_rejects_none() -> None:
    with pytest.raises(GraphStructureError, match="got NoneType"):
        ensure_graph(None)


def test_ensure_graph_rejects_missing_edges_list() -> None:
    with pytest.raises(GraphStructureError, match="'edges'"):
        ensure_graph({"nodes": []})


def test_ensure_graph_rejects_node_without_type() -> None:
    data = {
        "nodes": [{"id": "a", "name": "A", "layer": "domain"}],
        "edges": [],
    }

    with pytest.raises(GraphStructureError, match="type"):
        ensure_graph(data)


def test_ensure_graph_rejects_unknown_node_type() -> None:
    data = {
        "nodes": [{"id": "a", "name": "A", "type": "service", "layer": "domain"}],
        "edges": [],
    }

    with pytest.raises(GraphStructureError):
        ensure_graph(data)


def test_graph_structure_error_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        ensure_graph(["not", "a", "graph"])


def test_ensure_node_accepts_mapping_and_fills_defaults() -> None:
    node = ensure_node({"id": "n1", "name": "Order", "type": "entity", "layer": "domain"})

    assert isinstance(node, GraphNode)
    assert node.methods == ()
    assert node.properties == {}
    assert node.position.x == 0.0
    assert node.canonical_layer == LayerType.DOMAIN


def test_graph_nodes_are_immutable() -> None:
    graph = ensure_graph(_fixture_data())

    with pytest.raises(ValidationError):
        graph.nodes[0].name = "Renamed"  # type: ignore[misc]


def test_node_index_keeps_first_duplicate() -> None:
    data = {
        "nodes": [
            {"id": "a", "name": "First", "type": "entity", "layer": "domain"},
            {"id": "a", "name": "Second", "type": "entity", "layer": "domain"},
        ],
        "edges": [],
    }

    graph = ensure_graph(data)

    assert graph.node_index()["a"].name == "First"


def test_to_dict_uses_interchange_keys_and_reloads() -> None:
    graph = ensure_graph(_fixture_data())

    payload = graph.to_dict()

    assert payload["nodes"][1]["methods"][0]["returnType"] == "Promise<Receipt>"
    assert "description" not in payload["nodes"][1]
    assert ensure_graph(payload) == graph


def test_empty_graph_uses_current_schema_version() -> None:
    graph = ArchitectureGraph.empty(name="Blank")

    assert graph.nodes == ()
    assert graph.edges == ()
    assert graph.metadata.name == "Blank"
    assert graph.metadata.version == GRAPH_SCHEMA_VERSION
    assert graph.metadata.id.startswith("graph_")


def test_edges_of_type_filters_and_keeps_order() -> None:
    graph = ensure_graph(_fixture_data())

    implements = graph.edges_of_type(EdgeType.IMPLEMENTS)

    assert [edge.id for edge in implements] == ["e3", "e4"]


@pytest.mark.parametrize("version", ["1", "1.0", "1.4.2", " 1.0.0 "])
def test_check_schema_version_accepts_same_major(version: str) -> None:
    check_schema_version(version)


@pytest.mark.parametrize("version", ["2.0.0", "0.9.0", "latest", "1.0.0.0"])
def test_check_schema_version_rejects_other_versions(version: str) -> None:
    with pytest.raises(SchemaVersionError):
        check_schema_version(version)


def test_require_exhaustive_names_missing_members() -> None:
    with pytest.raises(RuntimeError, match="implements"):
        require_exhaustive({EdgeType.DEPENDENCY: 1}, EdgeType, "edge table")
