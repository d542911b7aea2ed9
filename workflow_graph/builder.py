from __future__ import annotations

from typing import Any, Iterable

import networkx as nx

from .preprocess import normalize_to_graphdef
from .schema import GraphDef


def build_nx_graph(graph_def: GraphDef) -> nx.DiGraph:
    g: nx.DiGraph = nx.DiGraph()

    # add nodes first so insertion order is the caller's node order
    g.add_nodes_from(graph_def.node_ids)

    # edges were filtered already, add_edge must never create a node here
    g.add_edges_from(graph_def.edges)

    return g


def build_workflow_graph(nodes: Iterable[Any], edges: Iterable[Any]) -> nx.DiGraph:
    return build_nx_graph(normalize_to_graphdef(nodes, edges))
