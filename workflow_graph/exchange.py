"""
Workflow export/import in the versioned JSON envelope.

Envelope: {"nodes": [...], "edges": [...], "exportedAt": "<ISO-8601>", "version": 1}
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .schema import ImportErrorKind, ImportResult

logger = logging.getLogger(__name__)

EXPORT_VERSION = 1


def _iso_timestamp(moment: datetime) -> str:
    # same shape as JavaScript's Date.toISOString(): millisecond precision, "Z"
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def export_workflow(
    nodes: List[Any],
    edges: List[Any],
    exported_at: Optional[datetime] = None,
) -> str:
    data: Dict[str, Any] = {
        "nodes": nodes,
        "edges": edges,
        "exportedAt": _iso_timestamp(exported_at or datetime.now(timezone.utc)),
        "version": EXPORT_VERSION,
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def is_node_like(value: Any) -> bool:
    return (
        isinstance(value, dict)
        and isinstance(value.get("id"), str)
        and isinstance(value.get("position"), dict)
    )


def is_edge_like(value: Any) -> bool:
    return (
        isinstance(value, dict)
        and isinstance(value.get("source"), str)
        and isinstance(value.get("target"), str)
    )


def parse_workflow_file(text: str) -> ImportResult:
    """
    Decode an exported workflow.

    Either every node and edge is accepted or the whole file is rejected; the
    arrays are returned exactly as decoded. Cycles and orphans are not checked
    here.
    """
    try:
        data = json.loads(text)
    except (ValueError, TypeError, RecursionError) as e:
        logger.debug(f"Workflow import: not JSON ({e})")
        return ImportResult.rejected(ImportErrorKind.INVALID_JSON, "Invalid JSON")

    if not isinstance(data, dict):
        return ImportResult.rejected(ImportErrorKind.INVALID_SHAPE, "Invalid workflow file")

    nodes = data.get("nodes")
    edges = data.get("edges")
    if not isinstance(nodes, list):
        return ImportResult.rejected(
            ImportErrorKind.INVALID_SHAPE, "Missing or invalid 'nodes' array"
        )
    if not isinstance(edges, list):
        return ImportResult.rejected(
            ImportErrorKind.INVALID_SHAPE, "Missing or invalid 'edges' array"
        )

    if not all(is_node_like(n) for n in nodes):
        return ImportResult.rejected(
            ImportErrorKind.INVALID_ELEMENT, "Some nodes are invalid (need id and position)"
        )
    if not all(is_edge_like(e) for e in edges):
        return ImportResult.rejected(
            ImportErrorKind.INVALID_ELEMENT, "Some edges are invalid (need source and target)"
        )

    version = data.get("version")
    if version is not None and version != EXPORT_VERSION:
        logger.warning(f"Importing workflow with unknown envelope version: {version!r}")

    logger.info(f"Imported workflow: {len(nodes)} node(s), {len(edges)} edge(s)")
    return ImportResult(ok=True, nodes=nodes, edges=edges)
