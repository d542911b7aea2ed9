"""
Workflow graph analysis: validation, dry-run simulation and JSON exchange
"""

from .schema import (
    GraphDef,
    ValidationResult,
    SimulationStep,
    SimulationResult,
    ImportErrorKind,
    ImportResult,
)
from .preprocess import normalize_to_graphdef
from .builder import build_nx_graph, build_workflow_graph
from .validator import validate_workflow, validate_graph, find_cycles, find_orphaned_nodes, find_source_nodes
from .toposort import simulate_workflow, level_toposort, GraphConsistencyError, CYCLE_ERROR
from .exchange import export_workflow, parse_workflow_file, EXPORT_VERSION
from .ids import IdGenerator, SequentialIdGenerator, UuidIdGenerator
from .templates import WorkflowTemplate, WORKFLOW_TEMPLATES, get_template, instantiate_template
from .visualize import draw_workflow

__all__ = [
    'GraphDef', 'ValidationResult', 'SimulationStep', 'SimulationResult', 'ImportErrorKind', 'ImportResult',
    'normalize_to_graphdef',
    'build_nx_graph', 'build_workflow_graph',
    'validate_workflow', 'validate_graph', 'find_cycles', 'find_orphaned_nodes', 'find_source_nodes',
    'simulate_workflow', 'level_toposort', 'GraphConsistencyError', 'CYCLE_ERROR',
    'export_workflow', 'parse_workflow_file', 'EXPORT_VERSION',
    'IdGenerator', 'SequentialIdGenerator', 'UuidIdGenerator',
    'WorkflowTemplate', 'WORKFLOW_TEMPLATES', 'get_template', 'instantiate_template',
    'draw_workflow',
]
