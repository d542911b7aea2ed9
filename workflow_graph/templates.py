"""
Starter workflows offered on an empty canvas.

Template node ids are placeholders (n1, n2, ...). ``instantiate_template``
replaces them with fresh ids so a template can be loaded repeatedly next to
existing nodes.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Collection, Dict, List, Optional, Set, Tuple

from .ids import IdGenerator, SequentialIdGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkflowTemplate:
    id: str
    name: str
    description: str
    nodes: List[Dict[str, Any]] = field(default_factory=list)
    edges: List[Dict[str, Any]] = field(default_factory=list)

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "nodeCount": len(self.nodes),
        }


def _node(nid: str, node_type: str, x: float, y: float, label: str) -> Dict[str, Any]:
    return {"id": nid, "type": node_type, "position": {"x": x, "y": y}, "data": {"label": label}}


def _chain(*pairs: Tuple[str, str]) -> List[Dict[str, Any]]:
    return [{"id": f"e{i}", "source": s, "target": t} for i, (s, t) in enumerate(pairs, start=1)]


WORKFLOW_TEMPLATES: List[WorkflowTemplate] = [
    WorkflowTemplate(
        id="empty",
        name="Empty",
        description="Start from scratch with an empty canvas",
    ),
    WorkflowTemplate(
        id="webhook-to-slack",
        name="Webhook → Slack",
        description="Trigger from a webhook and post to Slack",
        nodes=[
            _node("n1", "webhook", 100, 120, "Incoming webhook"),
            _node("n2", "slack", 380, 120, "Post to Slack"),
        ],
        edges=_chain(("n1", "n2")),
    ),
    WorkflowTemplate(
        id="schedule-email",
        name="Schedule → Email",
        description="Run on a schedule and send an email",
        nodes=[
            _node("n1", "schedule", 100, 100, "Every day at 9am"),
            _node("n2", "email", 380, 100, "Send digest"),
        ],
        edges=_chain(("n1", "n2")),
    ),
    WorkflowTemplate(
        id="conditional",
        name="Trigger → Condition → Action",
        description="Trigger, condition check, then send email",
        nodes=[
            _node("n1", "input", 100, 120, "Trigger"),
            _node("n2", "condition", 320, 120, "Check condition"),
            _node("n3", "email", 540, 120, "Send email"),
        ],
        edges=_chain(("n1", "n2"), ("n2", "n3")),
    ),
    WorkflowTemplate(
        id="http-delay-retry",
        name="HTTP → Delay → HTTP",
        description="Call API, wait, then call again (e.g. retry flow)",
        nodes=[
            _node("n1", "http", 80, 120, "Fetch data"),
            _node("n2", "delay", 300, 120, "Wait 5 min"),
            _node("n3", "http", 520, 120, "Retry request"),
        ],
        edges=_chain(("n1", "n2"), ("n2", "n3")),
    ),
    WorkflowTemplate(
        id="dual-trigger-pipeline",
        name="Dual-trigger pipeline",
        description="Schedule + Webhook → Merge → Condition → Email → Output",
        nodes=[
            _node("n1", "schedule", 80, 80, "Daily 9am"),
            _node("n2", "webhook", 80, 220, "Incoming webhook"),
            _node("n3", "http", 280, 80, "Fetch from API"),
            _node("n4", "set", 280, 220, "Map payload"),
            _node("n5", "merge", 480, 150, "Combine inputs"),
            _node("n6", "condition", 680, 150, "Should notify?"),
            _node("n7", "email", 880, 150, "Send email"),
            _node("n8", "slack", 1080, 150, "Post to Slack"),
            _node("n9", "output", 1280, 150, "Done"),
        ],
        edges=_chain(
            ("n1", "n3"),
            ("n2", "n4"),
            ("n3", "n5"),
            ("n4", "n5"),
            ("n5", "n6"),
            ("n6", "n7"),
            ("n7", "n8"),
            ("n8", "n9"),
        ),
    ),
]


def get_template(template_id: str) -> Optional[WorkflowTemplate]:
    for template in WORKFLOW_TEMPLATES:
        if template.id == template_id:
            return template
    return None


def instantiate_template(
    template: WorkflowTemplate,
    reserved_ids: Collection[str] = (),
    id_generator: Optional[IdGenerator] = None,
) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Copy a template's nodes and edges under fresh ids.

    Every node and edge gets a new id from ``id_generator`` that collides with
    neither ``reserved_ids`` nor ids handed out earlier in the same call.
    Edge endpoints are remapped to the new node ids.
    """
    gen = id_generator or SequentialIdGenerator(prefix="tpl_")
    taken: Set[str] = set(reserved_ids)
    id_map: Dict[str, str] = {}

    nodes: List[Dict[str, Any]] = []
    for node in template.nodes:
        new_id = gen(taken)
        taken.add(new_id)
        id_map[node["id"]] = new_id
        nodes.append({**copy.deepcopy(node), "id": new_id})

    edges: List[Dict[str, Any]] = []
    for edge in template.edges:
        new_id = gen(taken)
        taken.add(new_id)
        edges.append({
            **copy.deepcopy(edge),
            "id": new_id,
            "source": id_map.get(edge["source"], edge["source"]),
            "target": id_map.get(edge["target"], edge["target"]),
        })

    logger.debug(f"Instantiated template '{template.id}': {len(nodes)} node(s), {len(edges)} edge(s)")
    return nodes, edges
