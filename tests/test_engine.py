from __future__ import annotations

from pathlib import Path

import orjson

from codegen.write import generate
from contract import CodeGenerationPort, MetricsPort, ValidationPort
from engine import ArchitectureEngine
from graph.model import GraphNode, LayerType, NodeType, ensure_graph
from rules.config import ArchGraphConfig

_FIXTURE = Path(__file__).parent / "fixtures" / "checkout_graph.json"


def test_engine_implements_host_ports() -> None:
    engine = ArchitectureEngine()

    assert isinstance(engine, ValidationPort)
    assert isinstance(engine, MetricsPort)
    assert isinstance(engine, CodeGenerationPort)


def test_engine_delegates_to_passes() -> None:
    engine = ArchitectureEngine()
    graph = ensure_graph(orjson.loads(_FIXTURE.read_bytes()))

    assert engine.validate_graph(graph).is_valid
    assert engine.detect_cycles(graph) == []
    assert engine.calculate(graph).total_nodes == 7
    assert engine.generate(graph, "dot") == generate(graph, "dot")


def test_engine_uses_configured_naming() -> None:
    config = ArchGraphConfig.model_validate({"naming": {"suffixes": {"port": "Gateway"}}})
    node = GraphNode(id="p", name="PaymentPort", type=NodeType.PORT, layer=LayerType.DOMAIN)

    assert ArchitectureEngine().validate_node(node) == []
    issues = ArchitectureEngine(config).validate_node(node)
    assert [issue.id for issue in issues] == ["naming:p"]
