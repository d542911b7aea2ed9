from __future__ import annotations

from workflow_graph.schema import SimulationResult, ValidationResult
from workflow_graph.templates import WorkflowTemplate

from .models import SimulationResponse, SimulationStepModel, TemplateSummary, ValidationResponse


def build_validation_response(result: ValidationResult) -> ValidationResponse:
    return ValidationResponse(
        valid=result.valid,
        cycles=result.cycles,
        orphaned_node_ids=result.orphaned_node_ids,
    )


def build_simulation_response(result: SimulationResult) -> SimulationResponse:
    if not result.success:
        return SimulationResponse(success=False, error=result.error)

    steps = [
        SimulationStepModel(step_index=s.step_index, node_ids=s.node_ids)
        for s in result.steps
    ]
    return SimulationResponse(
        success=True,
        steps=steps,
        order=result.order,
        unreachable_node_ids=result.unreachable_node_ids,
    )


def build_template_summary(template: WorkflowTemplate) -> TemplateSummary:
    return TemplateSummary(
        id=template.id,
        name=template.name,
        description=template.description,
        node_count=len(template.nodes),
    )
