from __future__ import annotations

from .models import (
    WorkflowNode, WorkflowEdge, WorkflowGraph,
    ValidationResponse, SimulationStepModel, SimulationResponse,
    ImportRequest, ImportResponse, TemplateSummary, InstantiateRequest,
)
from .builders import build_validation_response, build_simulation_response, build_template_summary

__all__ = [
    'WorkflowNode', 'WorkflowEdge', 'WorkflowGraph',
    'ValidationResponse', 'SimulationStepModel', 'SimulationResponse',
    'ImportRequest', 'ImportResponse', 'TemplateSummary', 'InstantiateRequest',
    'build_validation_response', 'build_simulation_response', 'build_template_summary',
]
