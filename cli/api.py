from __future__ import annotations

import logging
import os
from typing import Any, Dict, List

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.responses import RedirectResponse, Response

from core.api import (
    ImportRequest,
    ImportResponse,
    InstantiateRequest,
    SimulationResponse,
    TemplateSummary,
    ValidationResponse,
    WorkflowGraph,
    build_simulation_response,
    build_template_summary,
    build_validation_response,
)
from workflow_graph.exchange import export_workflow, is_node_like, parse_workflow_file
from workflow_graph.ids import SequentialIdGenerator
from workflow_graph.templates import WORKFLOW_TEMPLATES, get_template, instantiate_template
from workflow_graph.toposort import simulate_workflow
from workflow_graph.validator import validate_workflow

load_dotenv()

LOG_LEVEL = os.getenv("WORKFLOW_LOG_LEVEL", "INFO").upper()
TEMPLATE_ID_PREFIX = os.getenv("WORKFLOW_TEMPLATE_ID_PREFIX", "tpl_")

logging.getLogger("workflow_graph").setLevel(LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Workflow Graph API")


@app.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    return RedirectResponse(url="/docs")


@app.get("/health")
def health() -> Dict[str, Any]:
    return {"ok": True}


@app.post("/workflows/validate", response_model=ValidationResponse)
def validate(body: WorkflowGraph) -> ValidationResponse:
    result = validate_workflow(body.plain_nodes(), body.plain_edges())
    return build_validation_response(result)


@app.post("/workflows/simulate", response_model=SimulationResponse)
def simulate(body: WorkflowGraph) -> SimulationResponse:
    result = simulate_workflow(body.plain_nodes(), body.plain_edges())
    return build_simulation_response(result)


@app.post("/workflows/export")
def export(body: WorkflowGraph) -> Response:
    nodes = body.plain_nodes()
    # import requires a position object on every node, refuse files it would reject
    missing = [n["id"] for n in nodes if not is_node_like(n)]
    if missing:
        raise HTTPException(status_code=422, detail=f"Nodes need a position object: {missing}")
    content = export_workflow(nodes, body.plain_edges())
    return Response(
        content=content,
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="workflow.json"'},
    )


@app.post("/workflows/import", response_model=ImportResponse)
def import_workflow(body: ImportRequest) -> ImportResponse:
    result = parse_workflow_file(body.content)
    if not result.ok:
        logger.info(f"Import rejected: {result.error}")
        raise HTTPException(
            status_code=400,
            detail={"error": result.error, "kind": result.error_kind.value},
        )
    return ImportResponse(nodes=result.nodes, edges=result.edges)


@app.get("/templates", response_model=List[TemplateSummary])
def list_templates() -> List[TemplateSummary]:
    return [build_template_summary(t) for t in WORKFLOW_TEMPLATES]


@app.post("/templates/{template_id}/instantiate", response_model=WorkflowGraph)
def instantiate(template_id: str, body: InstantiateRequest) -> Dict[str, Any]:
    template = get_template(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Unknown template: {template_id}")
    nodes, edges = instantiate_template(
        template,
        reserved_ids=body.reserved_ids,
        id_generator=SequentialIdGenerator(prefix=TEMPLATE_ID_PREFIX),
    )
    return {"nodes": nodes, "edges": edges}
