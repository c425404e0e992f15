from __future__ import annotations

from pathlib import Path

import orjson
import pytest

from codegen.write import generate
from contract.artifacts import CodeTarget, UnsupportedTargetError
from graph.model import (
    CANONICAL_LAYER,
    ArchitectureGraph,
    EdgeType,
    GraphEdge,
    GraphNode,
    Method,
    NodeType,
    Parameter,
    ensure_graph,
    graph_from_parts,
)

_FIXTURE = Path(__file__).parent / "fixtures" / "checkout_graph.json"


def _fixture_graph() -> ArchitectureGraph:
    return ensure_graph(orjson.loads(_FIXTURE.read_bytes()))


def _node(node_id: str, name: str, node_type: NodeType, **extra: object) -> GraphNode:
    return GraphNode(
        id=node_id,
        name=name,
        type=node_type,
        layer=CANONICAL_LAYER[node_type],
        **extra,
    )


def _edge(
    edge_id: str, source: str, target: str, edge_type: EdgeType = EdgeType.DEPENDENCY
) -> GraphEdge:
    return GraphEdge(id=edge_id, source=source, target=target, type=edge_type)


def _block(code: str, opener: str) -> str:
    start = code.index(opener)
    end = code.index("\n}\n", start)
    return code[start : end + 3]


def test_typescript_output_is_byte_identical_across_calls() -> None:
    graph = _fixture_graph()

    assert generate(graph, "typescript") == generate(graph, CodeTarget.TYPESCRIPT)


def test_header_has_no_timestamp() -> None:
    code = generate(_fixture_graph(), "typescript")

    assert code.splitlines()[:2] == [
        "// Auto-generated TypeScript code",
        "// Architecture: Checkout (schema 1.0.0)",
    ]
    assert "2026" not in code
    assert code.endswith("}\n")
    assert not code.endswith("\n\n")


def test_sections_follow_layer_order() -> None:
    code = generate(_fixture_graph(), "typescript")

    positions = [
        code.index("DOMAIN LAYER - ENTITIES"),
        code.index("DOMAIN LAYER - PORTS"),
        code.index("INFRASTRUCTURE LAYER - ADAPTERS"),
        code.index("APPLICATION LAYER - USE CASES"),
        code.index("INTERFACE LAYER - CONTROLLERS"),
    ]
    assert positions == sorted(positions)


def test_port_becomes_interface_with_declared_signatures() -> None:
    code = generate(_fixture_graph(), "typescript")

    assert _block(code, "export interface PaymentPort") == (
        "export interface PaymentPort {\n"
        "  charge(amount: number): Promise<Receipt>;\n"
        "}\n"
    )


def test_usecase_constructor_takes_ports_in_edge_order() -> None:
    code = generate(_fixture_graph(), "typescript")

    assert _block(code, "export class CheckoutUseCase") == (
        "export class CheckoutUseCase {\n"
        "  constructor(\n"
        "    private readonly paymentPort: PaymentPort,\n"
        "    private readonly orderRepositoryPort: OrderRepositoryPort,\n"
        "  ) {}\n"
        "\n"
        "  async execute(request: unknown): Promise<void> {\n"
        "    throw new Error('Not implemented');\n"
        "  }\n"
        "}\n"
    )


def test_usecase_constructor_order_follows_edges_not_names() -> None:
    graph = graph_from_parts(
        [
            _node("p1", "AlphaPort", NodeType.PORT),
            _node("p2", "ZuluPort", NodeType.PORT),
            _node("uc", "ShipUseCase", NodeType.USECASE),
        ],
        [_edge("e1", "uc", "p2"), _edge("e2", "uc", "p1"), _edge("e3", "uc", "p2")],
    )

    block = _block(generate(graph, "typescript"), "export class ShipUseCase")

    params = [line for line in block.splitlines() if "private readonly" in line]
    assert params == [
        "    private readonly zuluPort: ZuluPort,",
        "    private readonly alphaPort: AlphaPort,",
    ]


def test_adapter_implements_ports_and_merges_methods() -> None:
    code = generate(_fixture_graph(), "typescript")

    assert _block(code, "export class StripePaymentAdapter") == (
        "export class StripePaymentAdapter implements PaymentPort {\n"
        "  constructor() {}\n"
        "\n"
        "  async refund(paymentId: string): Promise<void> {\n"
        "    throw new Error('Not implemented');\n"
        "  }\n"
        "\n"
        "  async charge(amount: number): Promise<Receipt> {\n"
        "    throw new Error('Not implemented');\n"
        "  }\n"
        "}\n"
    )


def test_adapter_declared_method_shadows_port_method() -> None:
    charge = Method(
        name="charge",
        parameters=(Parameter(name="cents", type="bigint"),),
        return_type="void",
    )
    graph = graph_from_parts(
        [
            _node("port", "PaymentPort", NodeType.PORT, methods=(charge,)),
            _node(
                "adapter",
                "FakePaymentAdapter",
                NodeType.ADAPTER,
                methods=(charge.model_copy(update={"return_type": "boolean"}),),
            ),
        ],
        [_edge("e1", "adapter", "port", EdgeType.IMPLEMENTS)],
    )

    block = _block(generate(graph, "typescript"), "export class FakePaymentAdapter")

    assert block.count("async charge(") == 1
    assert "async charge(cents: bigint): Promise<boolean> {" in block


def test_controller_constructor_lists_every_dependency() -> None:
    code = generate(_fixture_graph(), "typescript")

    block = _block(code, "export class CheckoutController")

    assert "    private readonly checkoutUseCase: CheckoutUseCase," in block
    assert "  async handle(request: unknown): Promise<void> {" in block


def test_entity_keeps_description_as_doc_comment() -> None:
    code = generate(_fixture_graph(), "typescript")

    assert "/** Order aggregate. */\nexport class Order {\n}\n" in code


def test_names_are_sanitized_consistently() -> None:
    graph = graph_from_parts(
        [
            _node("p", "3D Secure Port", NodeType.PORT),
            _node("uc", "Pay UseCase", NodeType.USECASE),
        ],
        [_edge("e1", "uc", "p")],
    )

    code = generate(graph, "typescript")

    assert "export interface _3DSecurePort {" in code
    assert "export class PayUseCase {" in code
    assert "    private readonly _3DSecurePort: _3DSecurePort," in code


def test_reserved_node_names_become_valid_class_names() -> None:
    graph = graph_from_parts(
        [
            _node("e", "delete", NodeType.ENTITY),
            _node("p", "string", NodeType.PORT),
            _node("a", "class", NodeType.ADAPTER),
        ],
        [_edge("e1", "a", "p", EdgeType.IMPLEMENTS)],
    )

    code = generate(graph, "typescript")

    assert "export class delete_ {" in code
    assert "export interface string_ {" in code
    assert "export class class_ implements string_ {" in code


def test_generation_does_not_require_a_valid_graph() -> None:
    graph = graph_from_parts(
        [
            _node("a", "AlphaUseCase", NodeType.USECASE),
            _node("b", "BetaUseCase", NodeType.USECASE),
        ],
        [_edge("e1", "a", "b"), _edge("e2", "b", "a"), _edge("e3", "a", "ghost")],
    )

    code = generate(graph, "typescript")

    assert "export class AlphaUseCase {" in code
    assert "  constructor() {}" in code


def test_empty_graph_generates_header_only() -> None:
    code = generate(ArchitectureGraph.empty(name="Blank"), "typescript")

    assert code == (
        "// Auto-generated TypeScript code\n"
        "// Architecture: Blank (schema 1.0.0)\n"
    )


def test_unknown_target_is_rejected() -> None:
    with pytest.raises(UnsupportedTargetError, match="cobol"):
        generate(_fixture_graph(), "cobol")
