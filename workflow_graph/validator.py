from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Set, Tuple

import networkx as nx

from .builder import build_workflow_graph
from .schema import ValidationResult

logger = logging.getLogger(__name__)


def validate_workflow(nodes: Iterable[Any], edges: Iterable[Any]) -> ValidationResult:
    """Detect cycles and orphaned nodes in a workflow given as node/edge lists."""
    return validate_graph(build_workflow_graph(nodes, edges))


def validate_graph(g: nx.DiGraph) -> ValidationResult:
    cycles = find_cycles(g)
    orphaned = find_orphaned_nodes(g)

    if cycles:
        logger.debug(f"Cycles found: {cycles}")
    if orphaned:
        logger.debug(f"Orphaned nodes: {orphaned}")

    return ValidationResult(
        valid=not cycles and not orphaned,
        cycles=cycles,
        orphaned_node_ids=orphaned,
    )


def find_cycles(g: nx.DiGraph) -> List[List[str]]:
    """
    Tarjan's strongly connected components, one cycle per SCC.

    An SCC with more than one member is a cycle, listed in stack pop order.
    A single node is a cycle only when it has a self-loop. The DFS keeps its
    own stack of (node, successor iterator) frames instead of recursing, so
    long chains cannot exhaust the interpreter stack.
    """
    cycles: List[List[str]] = []
    index: Dict[str, int] = {}
    low: Dict[str, int] = {}
    path: List[str] = []
    on_path: Set[str] = set()
    counter = 0

    for root in g.nodes():
        if root in index:
            continue

        index[root] = low[root] = counter
        counter += 1
        path.append(root)
        on_path.add(root)
        work: List[Tuple[str, Iterator[str]]] = [(root, iter(g.successors(root)))]

        while work:
            cur, children = work[-1]
            descended = False
            for nb in children:
                if nb not in index:
                    index[nb] = low[nb] = counter
                    counter += 1
                    path.append(nb)
                    on_path.add(nb)
                    work.append((nb, iter(g.successors(nb))))
                    descended = True
                    break
                if nb in on_path:
                    low[cur] = min(low[cur], index[nb])
            if descended:
                continue

            # all successors done, leave this frame
            work.pop()
            if work:
                parent = work[-1][0]
                low[parent] = min(low[parent], low[cur])

            if low[cur] == index[cur]:
                scc: List[str] = []
                while True:
                    member = path.pop()
                    on_path.discard(member)
                    scc.append(member)
                    if member == cur:
                        break
                if len(scc) > 1 or g.has_edge(cur, cur):
                    cycles.append(scc)

    return cycles


def find_source_nodes(g: nx.DiGraph) -> List[str]:
    return [n for n, d in g.in_degree() if d == 0]


def find_orphaned_nodes(g: nx.DiGraph) -> List[str]:
    """
    Isolated nodes, plus non-source nodes that no source can reach.

    Every source starts its own traversal; visited nodes are shared across
    traversals.
    """
    sources = find_source_nodes(g)
    source_set = set(sources)

    reachable: Set[str] = set()
    for start in sources:
        _reachable_from(g, start, reachable)

    orphaned: List[str] = []
    for n in g.nodes():
        has_in = g.in_degree(n) > 0
        has_out = g.out_degree(n) > 0
        if not has_in and not has_out:
            orphaned.append(n)
        elif n not in reachable and n not in source_set:
            orphaned.append(n)
    return orphaned


def _reachable_from(g: nx.DiGraph, start: str, visited: Set[str]) -> Set[str]:
    stack = [start]
    while stack:
        cur = stack.pop()
        if cur in visited:
            continue
        visited.add(cur)
        for nb in g.successors(cur):
            if nb not in visited:
                stack.append(nb)
    return visited
