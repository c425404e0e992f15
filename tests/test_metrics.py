from __future__ import annotations

from pathlib import Path

import orjson
import pytest

from graph.model import (
    CANONICAL_LAYER,
    ArchitectureGraph,
    EdgeType,
    GraphEdge,
    GraphNode,
    NodeType,
    ensure_graph,
    graph_from_parts,
)
from metrics.calculator import calculate_metrics, compute_fan_stats
from rules.config import ArchGraphConfig

_FIXTURE = Path(__file__).parent / "fixtures" / "checkout_graph.json"


def _node(node_id: str, node_type: NodeType = NodeType.ENTITY) -> GraphNode:
    return GraphNode(
        id=node_id,
        name=f"Node{node_id}",
        type=node_type,
        layer=CANONICAL_LAYER[node_type],
    )


def _edge(
    edge_id: str, source: str, target: str, edge_type: EdgeType = EdgeType.DEPENDENCY
) -> GraphEdge:
    return GraphEdge(id=edge_id, source=source, target=target, type=edge_type)


def test_empty_graph_metrics_are_zero() -> None:
    metrics = calculate_metrics(ArchitectureGraph.empty())

    assert metrics.total_nodes == 0
    assert metrics.total_edges == 0
    assert metrics.complexity == 0.0
    assert metrics.max_depth == 0
    assert metrics.cycle_count == 0
    assert metrics.layer_violations == 0


def test_complexity_is_edges_per_node() -> None:
    graph = graph_from_parts(
        [_node("a"), _node("b"), _node("c"), _node("d")],
        [
            _edge("e1", "a", "b"),
            _edge("e2", "a", "c"),
            _edge("e3", "a", "d"),
            _edge("e4", "b", "c"),
            _edge("e5", "b", "d"),
            _edge("e6", "c", "d"),
        ],
    )

    metrics = calculate_metrics(graph)

    assert metrics.total_nodes == 4
    assert metrics.total_edges == 6
    assert metrics.complexity == pytest.approx(1.5)
    assert metrics.max_depth == 3
    assert metrics.cycle_count == 0


def test_cyclic_graph_depth_is_bounded_and_cycles_counted() -> None:
    graph = graph_from_parts(
        [_node("a"), _node("b")],
        [_edge("e1", "a", "b"), _edge("e2", "b", "a")],
    )

    metrics = calculate_metrics(graph)

    assert metrics.cycle_count == 1
    assert metrics.max_depth == 2


def test_layer_violations_count_only_layer_rule_errors() -> None:
    graph = graph_from_parts(
        [
            _node("order"),
            _node("uc", NodeType.USECASE),
            _node("adapter", NodeType.ADAPTER),
        ],
        [
            _edge("e1", "order", "uc"),
            _edge("e2", "order", "adapter"),
            _edge("e3", "order", "uc", EdgeType.IMPLEMENTS),
        ],
    )

    metrics = calculate_metrics(graph)

    assert metrics.layer_violations == 2


def test_same_layer_dependencies_count_as_layer_violations() -> None:
    graph = graph_from_parts(
        [
            _node("port", NodeType.PORT),
            _node("order"),
            _node("a", NodeType.USECASE),
            _node("b", NodeType.USECASE),
        ],
        [_edge("e1", "port", "order"), _edge("e2", "a", "b")],
    )

    assert calculate_metrics(graph).layer_violations == 2
    relaxed = ArchGraphConfig.model_validate({"layers": {"allow_same_layer": True}})
    assert calculate_metrics(graph, relaxed).layer_violations == 0


def test_fixture_metrics() -> None:
    graph = ensure_graph(orjson.loads(_FIXTURE.read_bytes()))

    metrics = calculate_metrics(graph)

    assert metrics.total_nodes == 7
    assert metrics.total_edges == 6
    assert metrics.complexity == pytest.approx(6 / 7)
    assert metrics.max_depth == 2
    assert metrics.layer_violations == 0
    assert metrics.fan_out["checkout"] == 3
    assert metrics.fan_in["checkout"] == 1
    assert metrics.fan_in["payment"] == 1


def test_to_dict_uses_camel_case_and_lists_every_layer() -> None:
    graph = graph_from_parts([_node("a"), _node("uc", NodeType.USECASE)], [])

    payload = calculate_metrics(graph).to_dict()

    assert payload["totalNodes"] == 2
    assert payload["maxDepth"] == 0
    assert payload["layerDistribution"] == {
        "domain": 1,
        "application": 1,
        "infrastructure": 0,
        "interface": 0,
    }


def test_compute_fan_stats_counts_distinct_neighbours() -> None:
    fan_in, fan_out = compute_fan_stats({"b": ["a", "a"], "a": [], "c": ["a", "b"]})

    assert fan_in == {"a": 2, "b": 1, "c": 0}
    assert fan_out == {"a": 0, "b": 1, "c": 2}
    assert list(fan_in) == ["a", "b", "c"]
