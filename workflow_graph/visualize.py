from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

import networkx as nx

from .builder import build_workflow_graph
from .preprocess import node_id
from .schema import SimulationResult, ValidationResult

logger = logging.getLogger(__name__)

# role -> color
COLOR_MAP: Dict[str, str] = {
    "trigger": "#90EE90",
    "action": "#87CEEB",
    "cycle": "#FF6B6B",
    "orphan": "#F0E68C",
}


def _try_graphviz_layout(g: nx.DiGraph) -> Dict[str, Tuple[float, float]]:
    try:
        # Prefer pygraphviz if available
        from networkx.drawing.nx_agraph import graphviz_layout  # type: ignore
        return graphviz_layout(g, prog="dot")
    except Exception:
        try:
            # Fallback to pydot if available
            from networkx.drawing.nx_pydot import graphviz_layout  # type: ignore
            return graphviz_layout(g, prog="dot")
        except Exception:
            return {}


def step_layered_layout(
    g: nx.DiGraph, simulation: Optional[SimulationResult]
) -> Dict[str, Tuple[float, float]]:
    """Columns by simulation step (left-to-right), rows evenly spaced per column."""
    if simulation is None or not simulation.success:
        return {}

    grouped: Dict[int, List[str]] = {}
    for step in simulation.steps:
        grouped[step.step_index] = [n for n in step.node_ids if n in g]

    pos: Dict[str, Tuple[float, float]] = {}
    col_gap = 3.0
    row_gap = 1.5
    for col, nodes in sorted(grouped.items()):
        x = col * col_gap
        # Center around 0 vertically
        offset = (len(nodes) - 1) * row_gap / 2.0
        for i, n in enumerate(nodes):
            pos[n] = (x, -offset + i * row_gap)
    return pos


def node_roles(g: nx.DiGraph, validation: Optional[ValidationResult]) -> Dict[str, str]:
    cyclic: Set[str] = set()
    orphaned: Set[str] = set()
    if validation is not None:
        cyclic = {n for cycle in validation.cycles for n in cycle}
        orphaned = set(validation.orphaned_node_ids)

    roles: Dict[str, str] = {}
    for n in g.nodes():
        if n in cyclic:
            roles[n] = "cycle"
        elif n in orphaned:
            roles[n] = "orphan"
        elif g.in_degree(n) == 0:
            roles[n] = "trigger"
        else:
            roles[n] = "action"
    return roles


def _labels(nodes: Iterable[Any]) -> Dict[str, str]:
    labels: Dict[str, str] = {}
    for node in nodes:
        nid = node_id(node)
        if nid is None:
            continue
        data = node.get("data") if isinstance(node, dict) else getattr(node, "data", None)
        label = data.get("label") if isinstance(data, dict) else None
        labels[nid] = label or nid
    return labels


def draw_workflow(
    nodes: List[Any],
    edges: List[Any],
    save_path: str,
    validation: Optional[ValidationResult] = None,
    simulation: Optional[SimulationResult] = None,
) -> bool:
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from matplotlib.patches import Patch
    except ImportError:
        print("⚠️ matplotlib is not installed, skipping rendering.")
        return False

    g = build_workflow_graph(nodes, edges)

    # Layout on full graph to keep structure
    pos = _try_graphviz_layout(g)
    if not pos:
        pos = step_layered_layout(g, simulation)
    if not pos:
        pos = nx.spring_layout(g, seed=42, k=0.7)

    roles = node_roles(g, validation)
    labels = {n: lbl for n, lbl in _labels(nodes).items() if n in g}

    plt.figure(figsize=(16, 10))

    if g.number_of_nodes():
        nodelist = list(g.nodes())
        nx.draw_networkx_nodes(
            g,
            pos,
            nodelist=nodelist,
            node_color=[COLOR_MAP[roles[n]] for n in nodelist],
            node_size=2000,
            edgecolors="#444444",
            linewidths=2,
        )

    if g.number_of_edges():
        nx.draw_networkx_edges(
            g,
            pos,
            arrows=True,
            arrowstyle="-|>",
            arrowsize=22,
            width=2.6,
            edge_color="#555555",
            connectionstyle="arc3,rad=0.06",
        )

    if labels:
        nx.draw_networkx_labels(
            g,
            pos,
            labels=labels,
            font_size=11,
            font_weight="bold",
            font_color="#111111",
        )

    handles = [
        Patch(facecolor=col, edgecolor="#444444", label=role)
        for role, col in COLOR_MAP.items()
    ]
    plt.legend(
        handles=handles,
        title="Role",
        loc="lower left",
        bbox_to_anchor=(1.02, 0),
        borderaxespad=0.0,
    )

    plt.axis("off")
    plt.tight_layout()
    plt.savefig(save_path, dpi=150, bbox_inches="tight", facecolor="white", edgecolor="none")
    plt.close()
    logger.info(f"Workflow rendered to {save_path}")
    return True
