from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass
class GraphDef:
    """Node ids (caller order, deduplicated) and edges that survived filtering."""
    node_ids: List[str]
    edges: List[tuple[str, str]]
    dropped_edges: int = 0


@dataclass
class ValidationResult:
    valid: bool
    cycles: List[List[str]] = field(default_factory=list)
    orphaned_node_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "cycles": [list(c) for c in self.cycles],
            "orphanedNodeIds": list(self.orphaned_node_ids),
        }


@dataclass
class SimulationStep:
    step_index: int
    node_ids: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"stepIndex": self.step_index, "nodeIds": list(self.node_ids)}


@dataclass
class SimulationResult:
    success: bool
    steps: List[SimulationStep] = field(default_factory=list)
    order: List[str] = field(default_factory=list)
    unreachable_node_ids: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def succeeded(cls, steps: List[SimulationStep], order: List[str]) -> "SimulationResult":
        return cls(success=True, steps=steps, order=order)

    @classmethod
    def failed(cls, error: str) -> "SimulationResult":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {
            "success": True,
            "steps": [s.to_dict() for s in self.steps],
            "order": list(self.order),
            "unreachableNodeIds": list(self.unreachable_node_ids),
        }


class ImportErrorKind(str, Enum):
    """Why a workflow file was rejected"""
    INVALID_JSON = "invalid_json"
    INVALID_SHAPE = "invalid_shape"
    INVALID_ELEMENT = "invalid_element"


@dataclass
class ImportResult:
    ok: bool
    nodes: List[Any] = field(default_factory=list)
    edges: List[Any] = field(default_factory=list)
    error: Optional[str] = None
    error_kind: Optional[ImportErrorKind] = None

    @classmethod
    def rejected(cls, kind: ImportErrorKind, error: str) -> "ImportResult":
        return cls(ok=False, error=error, error_kind=kind)
