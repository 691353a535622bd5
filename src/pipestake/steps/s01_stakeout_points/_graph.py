"""Connectivity graph over part ids built from connector joins.

The graph is a plain ``dict[str, set[str]]``: undirected (every edge stored
both ways) and free of self-loops. Queries are queue-based breadth-first
searches bounded by a hop counter.
"""

from __future__ import annotations

import logging
from collections import deque

from pipestake.core.contracts import PartRecord

logger = logging.getLogger(__name__)

Adjacency = dict[str, set[str]]


def build_adjacency(parts: list[PartRecord]) -> Adjacency:
    """Build the undirected part graph from each connector's joined refs.

    Every part gets a node, even with no neighbours. Refs owned by
    non-fabrication elements and refs back to the part itself are ignored.
    Owners missing from ``parts`` still get a node.
    """
    adj: Adjacency = {}
    for part in parts:
        pid = part.id
        adj.setdefault(pid, set())
        for conn in part.connectors:
            if conn.joined is None:
                logger.debug(f"Part {pid}: connector refs unreadable, skipping")
                continue
            for ref in conn.joined:
                if not ref.fabrication:
                    continue
                other = ref.owner
                if other == pid:
                    continue
                adj.setdefault(other, set())
                adj[pid].add(other)
                adj[other].add(pid)
    return adj


def are_connected(adj: Adjacency, a: str, b: str, max_hops: int) -> bool:
    """True if ``b`` is reachable from ``a`` within ``max_hops`` edges.

    A part is always connected to itself. Unknown ids are never connected.
    """
    if a == b:
        return True
    if a not in adj or b not in adj:
        return False

    queue: deque[tuple[str, int]] = deque([(a, 0)])
    seen = {a}
    while queue:
        cur, depth = queue.popleft()
        for n in adj.get(cur, ()):
            if n in seen:
                continue
            if n == b:
                return True
            if depth + 1 < max_hops:
                seen.add(n)
                queue.append((n, depth + 1))
    return False


def reachable_within(adj: Adjacency, start: str, max_hops: int) -> list[str]:
    """Ids reachable from ``start`` in 1..max_hops edges, in BFS order.

    ``start`` itself is excluded. Neighbour sets are visited in sorted order
    so the result is deterministic.
    """
    if start not in adj:
        return []

    result: list[str] = []
    queue: deque[tuple[str, int]] = deque([(start, 0)])
    seen = {start}
    while queue:
        cur, depth = queue.popleft()
        for n in sorted(adj.get(cur, ())):
            if n in seen:
                continue
            seen.add(n)
            result.append(n)
            if depth + 1 < max_hops:
                queue.append((n, depth + 1))
    return result
