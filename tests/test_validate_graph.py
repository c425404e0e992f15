from __future__ import annotations

from pathlib import Path

import orjson
import pytest

from contract import validate_graph
from contract.issues import IssueType, Severity
from graph.model import (
    CANONICAL_LAYER,
    EdgeType,
    GraphEdge,
    GraphNode,
    GraphStructureError,
    NodeType,
    ensure_graph,
    graph_from_parts,
)
from rules.config import ArchGraphConfig

_FIXTURE = Path(__file__).parent / "fixtures" / "checkout_graph.json"


def _node(node_id: str, name: str, node_type: NodeType) -> GraphNode:
    return GraphNode(id=node_id, name=name, type=node_type, layer=CANONICAL_LAYER[node_type])


def _edge(
    edge_id: str, source: str, target: str, edge_type: EdgeType = EdgeType.DEPENDENCY
) -> GraphEdge:
    return GraphEdge(id=edge_id, source=source, target=target, type=edge_type)


def test_checkout_fixture_is_valid() -> None:
    graph = ensure_graph(orjson.loads(_FIXTURE.read_bytes()))

    result = validate_graph(graph)

    assert result.is_valid
    assert result.errors == []
    assert result.warnings == []


def test_cycle_is_reported_with_names_and_stable_id() -> None:
    graph = graph_from_parts(
        [
            _node("a", "Order", NodeType.ENTITY),
            _node("b", "Invoice", NodeType.ENTITY),
        ],
        [_edge("e1", "a", "b"), _edge("e2", "b", "a")],
    )

    result = validate_graph(graph)

    cycles = result.of_type(IssueType.CIRCULAR_DEPENDENCY)
    assert len(cycles) == 1
    assert cycles[0].id == "cycle:a->b->a"
    assert cycles[0].node_id == "a"
    assert cycles[0].message == "Circular dependency detected: Order → Invoice → Order"
    assert not result.is_valid


def test_self_loop_is_one_validation_error_and_not_a_cycle() -> None:
    graph = graph_from_parts(
        [_node("a", "Order", NodeType.ENTITY)],
        [_edge("e1", "a", "a")],
    )

    result = validate_graph(graph)

    assert [issue.id for issue in result.errors] == ["self_loop:e1"]
    assert result.errors[0].type == IssueType.VALIDATION_ERROR
    assert result.of_type(IssueType.CIRCULAR_DEPENDENCY) == []


def test_dangling_edge_is_reported_and_other_checks_still_run() -> None:
    graph = graph_from_parts(
        [_node("a", "PaymentGateway", NodeType.PORT)],
        [_edge("e1", "a", "ghost")],
    )

    result = validate_graph(graph)

    assert [issue.id for issue in result.errors] == ["dangling_edge:e1"]
    assert "ghost" in result.errors[0].message
    assert [issue.id for issue in result.warnings] == ["naming:a"]


def test_duplicate_ids_are_reported_once() -> None:
    graph = graph_from_parts(
        [
            _node("a", "Order", NodeType.ENTITY),
            _node("a", "Order", NodeType.ENTITY),
            _node("a", "Order", NodeType.ENTITY),
        ],
        [],
    )

    result = validate_graph(graph)

    duplicates = [issue for issue in result.errors if issue.id.startswith("duplicate_node:")]
    assert len(duplicates) == 1


def test_issue_order_follows_pass_order() -> None:
    graph = graph_from_parts(
        [
            _node("a", "Order", NodeType.ENTITY),
            _node("b", "Invoice", NodeType.ENTITY),
            _node("uc", "Checkout", NodeType.USECASE),
        ],
        [
            _edge("e1", "a", "b"),
            _edge("e2", "b", "a"),
            _edge("e3", "a", "uc"),
            _edge("e4", "a", "missing"),
        ],
    )

    result = validate_graph(graph)

    assert [issue.id for issue in result.errors] == [
        "dangling_edge:e4",
        "cycle:a->b->a",
        "layer:e1",
        "layer:e2",
        "layer:e3",
    ]
    assert [issue.id for issue in result.warnings] == ["naming:uc"]


def test_repeated_validation_returns_identical_issues() -> None:
    graph = graph_from_parts(
        [_node("a", "Order", NodeType.ENTITY), _node("uc", "Checkout", NodeType.USECASE)],
        [_edge("e1", "a", "uc")],
    )

    assert validate_graph(graph).to_dict() == validate_graph(graph).to_dict()


def test_config_relaxed_policy_allows_infrastructure_to_application() -> None:
    graph = graph_from_parts(
        [
            _node("adapter", "QueueAdapter", NodeType.ADAPTER),
            _node("uc", "CheckoutUseCase", NodeType.USECASE),
        ],
        [_edge("e1", "adapter", "uc")],
    )
    relaxed = ArchGraphConfig.model_validate({"layers": {"policy": "relaxed"}})

    assert [issue.id for issue in validate_graph(graph).errors] == ["layer:e1"]
    assert validate_graph(graph, relaxed).is_valid


def test_result_to_dict_uses_host_keys() -> None:
    graph = graph_from_parts(
        [_node("a", "Order", NodeType.ENTITY)],
        [_edge("e1", "a", "a")],
    )

    payload = validate_graph(graph).to_dict()

    assert payload["isValid"] is False
    assert payload["errors"] == [
        {
            "id": "self_loop:e1",
            "type": "validation_error",
            "message": "Node 'a' depends on itself",
            "severity": "error",
            "nodeId": "a",
            "edgeId": "e1",
        }
    ]
    assert payload["warnings"] == []


def test_warnings_do_not_make_graph_invalid() -> None:
    graph = graph_from_parts([_node("p", "Payments", NodeType.PORT)], [])

    result = validate_graph(graph)

    assert result.is_valid
    assert [issue.severity for issue in result.warnings] == [Severity.WARNING]


def test_validate_graph_rejects_non_graph() -> None:
    with pytest.raises(GraphStructureError):
        validate_graph(None)  # type: ignore[arg-type]
