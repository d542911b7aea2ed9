from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire models use camelCase keys, same as the canvas"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WorkflowNode(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    type: Optional[str] = None
    position: Optional[Dict[str, Any]] = None
    data: Optional[Dict[str, Any]] = None


class WorkflowEdge(BaseModel):
    model_config = ConfigDict(extra="allow")

    source: str
    target: str
    id: Optional[str] = None


class WorkflowGraph(BaseModel):
    nodes: List[WorkflowNode] = Field(default_factory=list)
    edges: List[WorkflowEdge] = Field(default_factory=list)

    def plain_nodes(self) -> List[Dict[str, Any]]:
        return [n.model_dump(exclude_unset=True) for n in self.nodes]

    def plain_edges(self) -> List[Dict[str, Any]]:
        return [e.model_dump(exclude_unset=True) for e in self.edges]


class ValidationResponse(CamelModel):
    valid: bool
    cycles: List[List[str]] = Field(default_factory=list)
    orphaned_node_ids: List[str] = Field(default_factory=list)


class SimulationStepModel(CamelModel):
    step_index: int
    node_ids: List[str]


class SimulationResponse(CamelModel):
    success: bool
    steps: List[SimulationStepModel] = Field(default_factory=list)
    order: List[str] = Field(default_factory=list)
    unreachable_node_ids: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class ImportRequest(BaseModel):
    content: str


class ImportResponse(BaseModel):
    ok: bool = True
    nodes: List[Dict[str, Any]]
    edges: List[Dict[str, Any]]


class TemplateSummary(CamelModel):
    id: str
    name: str
    description: str
    node_count: int


class InstantiateRequest(CamelModel):
    reserved_ids: List[str] = Field(default_factory=list)
