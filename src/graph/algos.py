"""Graph algorithms over dependency edges.

Both traversals use an explicit stack so that very deep graphs cannot
exhaust the interpreter's recursion limit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from graph.model import EdgeType, ensure_graph

if TYPE_CHECKING:
    from collections.abc import Iterator

    from graph.model import ArchitectureGraph, GraphEdge

_EXHAUSTED = object()


def build_dependency_graph(graph: ArchitectureGraph) -> dict[str, list[str]]:
    """Build the adjacency map used by cycle and depth analysis.

    Keys are every node id in graph order; values are dependency targets in
    edge-list order. Edges of any other type, dangling edges and self-loops
    are left out (they are reported by the consistency rules instead).
    """
    adjacency: dict[str, list[str]] = {}
    for node in graph.nodes:
        adjacency.setdefault(node.id, [])

    for edge in graph.edges:
        if edge.type != EdgeType.DEPENDENCY:
            continue
        if edge.source == edge.target:
            continue
        if edge.source not in adjacency or edge.target not in adjacency:
            continue
        adjacency[edge.source].append(edge.target)

    return adjacency


def detect_cycles(graph: ArchitectureGraph) -> list[list[str]]:
    """Find every cycle reachable through dependency edges.

    DFS runs from each unvisited node in graph order. Reaching a node that
    is on the current path emits ``path[index(node):] + [node]`` and that
    branch stops there; the remaining neighbours are still explored.
    Identical sequences (parallel edges) are reported once.

    Returns:
        List of cycles, each a list of node ids starting and ending with the
        same id.
    """
    graph = ensure_graph(graph)
    adjacency = build_dependency_graph(graph)

    visited: set[str] = set()
    cycles: list[list[str]] = []
    seen: set[tuple[str, ...]] = set()

    for root in adjacency:
        if root in visited:
            continue
        visited.add(root)
        path = [root]
        position = {root: 0}
        frames: list[Iterator[str]] = [iter(adjacency[root])]

        while frames:
            neighbor = next(frames[-1], _EXHAUSTED)
            if neighbor is _EXHAUSTED:
                frames.pop()
                finished = path.pop()
                del position[finished]
                continue

            if neighbor in position:
                cycle = [*path[position[neighbor] :], neighbor]
                key = tuple(cycle)
                if key not in seen:
                    seen.add(key)
                    cycles.append(cycle)
                continue

            if neighbor in visited:
                continue

            visited.add(neighbor)
            position[neighbor] = len(path)
            path.append(neighbor)
            frames.append(iter(adjacency[neighbor]))

    return cycles


def find_path(graph: ArchitectureGraph, start: str, goal: str) -> list[str] | None:
    """Return a dependency path from ``start`` to ``goal``, or None.

    The path lists node ids from ``start`` to ``goal`` inclusive and follows
    the first route found in edge order.
    """
    graph = ensure_graph(graph)
    adjacency = build_dependency_graph(graph)
    if start not in adjacency or goal not in adjacency:
        return None
    if start == goal:
        return [start]

    visited = {start}
    path = [start]
    frames: list[Iterator[str]] = [iter(adjacency[start])]
    while frames:
        neighbor = next(frames[-1], _EXHAUSTED)
        if neighbor is _EXHAUSTED:
            frames.pop()
            path.pop()
            continue
        if neighbor == goal:
            return [*path, neighbor]
        if neighbor in visited:
            continue
        visited.add(neighbor)
        path.append(neighbor)
        frames.append(iter(adjacency[neighbor]))
    return None


def _measure_from(
    start: str,
    adjacency: dict[str, list[str]],
    depths: dict[str, int],
) -> None:
    """Post-order depth computation with a per-traversal path guard.

    A child that is already on the current path contributes 0, which bounds
    the walk on cyclic graphs at the cost of under-counting them.
    """
    on_path = {start}
    best = {start: -1}
    frames: list[tuple[str, Iterator[str]]] = [(start, iter(adjacency[start]))]

    while frames:
        node, children = frames[-1]
        child = next(children, _EXHAUSTED)

        if child is _EXHAUSTED:
            frames.pop()
            on_path.discard(node)
            depths[node] = best.pop(node) + 1
            if frames:
                parent = frames[-1][0]
                best[parent] = max(best[parent], depths[node])
            continue

        if child in on_path:
            best[node] = max(best[node], 0)
        elif child in depths:
            best[node] = max(best[node], depths[child])
        else:
            on_path.add(child)
            best[child] = -1
            frames.append((child, iter(adjacency[child])))


def dependency_depths(graph: ArchitectureGraph) -> dict[str, int]:
    """Depth of every node: 0 without outgoing dependencies, else 1 + max child.

    Traversal starts from roots (no incoming dependency edge), then from any
    node not reached yet so purely cyclic components are measured too.
    """
    graph = ensure_graph(graph)
    adjacency = build_dependency_graph(graph)
    has_incoming = {target for targets in adjacency.values() for target in targets}

    roots = [node_id for node_id in adjacency if node_id not in has_incoming]
    rest = [node_id for node_id in adjacency if node_id in has_incoming]

    depths: dict[str, int] = {}
    for start in [*roots, *rest]:
        if start not in depths:
            _measure_from(start, adjacency, depths)
    return depths


def max_dependency_depth(graph: ArchitectureGraph) -> int:
    return max(dependency_depths(graph).values(), default=0)


def find_self_loops(graph: ArchitectureGraph) -> list[GraphEdge]:
    """Return dependency edges whose source equals their target."""
    return [
        edge
        for edge in graph.edges
        if edge.type == EdgeType.DEPENDENCY and edge.source == edge.target
    ]


__all__ = [
    "build_dependency_graph",
    "dependency_depths",
    "detect_cycles",
    "find_path",
    "find_self_loops",
    "max_dependency_depth",
]
