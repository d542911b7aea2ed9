from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List

from workflow_graph.builder import build_workflow_graph
from workflow_graph.exchange import parse_workflow_file
from workflow_graph.schema import ValidationResult
from workflow_graph.validator import find_source_nodes, validate_graph

logger = logging.getLogger(__name__)


@dataclass
class WorkflowInfo:
    nodes: List[Dict[str, Any]]
    edges: List[Dict[str, Any]]
    validation: ValidationResult
    start_nodes: List[str]


def load_and_validate(json_path: str) -> WorkflowInfo:
    """Load a workflow file (exported envelope or plain nodes/edges), validate it, and return an info bundle."""
    if not os.path.exists(json_path):
        raise FileNotFoundError(f"Workflow file not found: {json_path}")

    with open(json_path, "r", encoding="utf-8") as f:
        result = parse_workflow_file(f.read())
    if not result.ok:
        raise ValueError(f"Failed to load {json_path}: {result.error}")

    g = build_workflow_graph(result.nodes, result.edges)
    validation = validate_graph(g)
    start_nodes = find_source_nodes(g)

    logger.info(f"Loaded {len(result.nodes)} nodes, {len(result.edges)} edges from {json_path}")
    return WorkflowInfo(
        nodes=result.nodes,
        edges=result.edges,
        validation=validation,
        start_nodes=start_nodes,
    )
