from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .schema import GraphDef

logger = logging.getLogger(__name__)


def _field(item: Any, name: str) -> Any:
    # canvas payloads arrive as dicts, API payloads as pydantic models
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def node_id(node: Any) -> Optional[str]:
    value = _field(node, "id")
    return value if isinstance(value, str) else None


def edge_endpoints(edge: Any) -> Optional[Tuple[str, str]]:
    source = _field(edge, "source")
    target = _field(edge, "target")
    if not isinstance(source, str) or not isinstance(target, str):
        return None
    return source, target


def normalize_to_graphdef(nodes: Iterable[Any], edges: Iterable[Any]) -> GraphDef:
    """Reduce caller node/edge lists to ids and in-graph edge pairs.

    Never mutates the inputs. Nodes without a string id and edges with an
    endpoint outside the node set are dropped silently.
    """
    seen: Dict[str, None] = {}
    for node in nodes:
        nid = node_id(node)
        if nid is None:
            logger.debug(f"Ignoring node without string id: {node!r}")
            continue
        seen.setdefault(nid, None)

    pairs: List[tuple[str, str]] = []
    dropped = 0
    for edge in edges:
        ends = edge_endpoints(edge)
        if ends is None or ends[0] not in seen or ends[1] not in seen:
            dropped += 1
            continue
        pairs.append(ends)

    if dropped:
        logger.debug(f"Ignored {dropped} dangling or malformed edge(s)")
    return GraphDef(node_ids=list(seen), edges=pairs, dropped_edges=dropped)
