from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Set

import networkx as nx

from .builder import build_workflow_graph
from .schema import SimulationResult, SimulationStep
from .validator import validate_graph

logger = logging.getLogger(__name__)

CYCLE_ERROR = "Workflow has cycles. Fix cycles before simulating."


class GraphConsistencyError(RuntimeError):
    """Level walk stalled on a graph already checked to be acyclic."""


def simulate_workflow(nodes: Iterable[Any], edges: Iterable[Any]) -> SimulationResult:
    """
    Dry-run a workflow: order its nodes in steps starting from the triggers.

    Nothing is executed. A step holds every node whose predecessors all ran
    in earlier steps. Cycles make the workflow unschedulable and are reported
    as a failed result; orphaned nodes do not block the simulation.

    Raises GraphConsistencyError only if the level walk stalls after the
    cycle check passed, which indicates a bug rather than a bad workflow.
    """
    g = build_workflow_graph(nodes, edges)
    if g.number_of_nodes() == 0:
        return SimulationResult.succeeded([], [])

    validation = validate_graph(g)
    if validation.cycles:
        logger.info(f"Simulation refused, {len(validation.cycles)} cycle(s) present")
        return SimulationResult.failed(CYCLE_ERROR)

    steps = level_toposort(g)
    order = [n for step in steps for n in step.node_ids]
    logger.debug(f"Simulated {len(order)} node(s) in {len(steps)} step(s)")
    return SimulationResult.succeeded(steps, order)


def level_toposort(g: nx.DiGraph) -> List[SimulationStep]:
    """Kahn's algorithm, batched by wavefront instead of one node at a time."""
    in_deg: Dict[str, int] = dict(g.in_degree())
    completed: Set[str] = set()
    steps: List[SimulationStep] = []

    # dict keys as an ordered set
    current: Dict[str, None] = {n: None for n, d in in_deg.items() if d == 0}

    while current:
        level = [n for n in current if n not in completed and in_deg[n] == 0]
        if not level:
            break
        completed.update(level)
        steps.append(SimulationStep(step_index=len(steps), node_ids=level))

        nxt: Dict[str, None] = {}
        for cur in level:
            for nb in g.successors(cur):
                in_deg[nb] -= 1
                if in_deg[nb] == 0:
                    nxt[nb] = None
        current = nxt

    if len(completed) != g.number_of_nodes():
        remaining = [n for n in g.nodes() if n not in completed]
        logger.error(f"Level walk stopped with unscheduled nodes: {remaining}")
        raise GraphConsistencyError(
            f"{len(remaining)} node(s) never became eligible: {remaining}"
        )
    return steps
