"""Graph traversal trace generators."""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from typing import Any

from algoplay.core.result import Result, err, ok
from algoplay.core.trace import Trace, TraceRecorder

from .validation import require_mapping

BFS_HINT = "{'nodes': [str, ...], 'edges': [[str, str], ...], 'start': str}"
MAX_GRAPH_NODES = 50


def _parse_graph(initial_input: Any) -> Result[tuple[list[str], dict[str, list[str]], str], str]:
    def _check(payload: Mapping[str, Any]) -> Result[tuple[list[str], dict[str, list[str]], str], str]:
        nodes = payload.get("nodes")
        edges = payload.get("edges", [])
        start = payload.get("start")
        if not isinstance(nodes, list | tuple) or not nodes or not all(isinstance(v, str) for v in nodes):
            return err("'nodes' must be a non-empty list of labels")
        if len(nodes) > MAX_GRAPH_NODES:
            return err(f"'nodes' must have at most {MAX_GRAPH_NODES} entries")
        if len(set(nodes)) != len(nodes):
            return err("'nodes' must not contain duplicates")
        adjacency: dict[str, list[str]] = {v: [] for v in nodes}
        if not isinstance(edges, list | tuple):
            return err("'edges' must be a list of [from, to] pairs")
        for edge in edges:
            if not isinstance(edge, list | tuple) or len(edge) != 2:
                return err(f"invalid edge {edge!r}; expected [from, to]")
            a, b = edge
            if not isinstance(a, str) or not isinstance(b, str):
                return err(f"invalid edge {edge!r}; endpoints must be node labels")
            if a not in adjacency or b not in adjacency:
                return err(f"edge {edge!r} references an unknown node")
            # undirected
            if b not in adjacency[a]:
                adjacency[a].append(b)
            if a not in adjacency[b]:
                adjacency[b].append(a)
        if start is None:
            start = nodes[0]
        if not isinstance(start, str) or start not in adjacency:
            return err(f"start node {start!r} is not in 'nodes'")
        return ok((list(nodes), adjacency, start))

    return require_mapping(initial_input).flat_map(_check)


def breadth_first_search(initial_input: Any) -> Trace[dict[str, Any]]:
    """BFS over an undirected graph, neighbours visited in edge order."""
    parsed = _parse_graph(initial_input)
    if parsed.is_err():
        return Trace.failure(f"Error: invalid data for BFS: {parsed.unwrap_err()}", expected=BFS_HINT)

    nodes, adjacency, start = parsed.unwrap()
    edges = sorted({tuple(sorted((a, b))) for a, nbrs in adjacency.items() for b in nbrs})
    visited: list[str] = []
    queue: deque[str] = deque([start])
    discovered = {start}

    def frame(current: str | None = None, edge: tuple[str, str] | None = None) -> dict[str, Any]:
        return {
            "nodes": nodes,
            "edges": edges,
            "visited": visited,
            "queue": list(queue),
            "current": current,
            "edge": edge,
        }

    rec: TraceRecorder[dict[str, Any]] = TraceRecorder()
    rec.record(
        frame(),
        f"Starting BFS from node {start}. All nodes are unvisited; {start} is enqueued.",
        code="queue := [start]; mark start discovered",
    )

    while queue:
        current = queue.popleft()
        visited.append(current)
        rec.record(
            frame(current),
            f"Dequeue node {current} and mark it as visited.",
            code="v := queue.dequeue()",
            complexity=f"{len(visited)} of {len(nodes)} nodes visited",
        )
        for neighbor in adjacency[current]:
            if neighbor in discovered:
                continue
            discovered.add(neighbor)
            queue.append(neighbor)
            rec.record(
                frame(current, (current, neighbor)),
                f"Neighbor {neighbor} of {current} is undiscovered: enqueue it.",
                code="for each unvisited neighbor u of v: queue.enqueue(u)",
            )

    unreachable = [v for v in nodes if v not in discovered]
    tail = f" Unreachable: {', '.join(unreachable)}." if unreachable else ""
    rec.record(
        frame(),
        f"BFS complete. Visit order: {' -> '.join(visited)}.{tail}",
        code="end while",
        complexity="O(V + E)",
    )
    return rec.build()


__all__ = ["MAX_GRAPH_NODES", "breadth_first_search"]
