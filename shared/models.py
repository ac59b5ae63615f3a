"""Domain objects assembled from quality gate responses."""
from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class MetricType(str, enum.Enum):
    """Metric value types that get a dedicated rendering in explanations."""

    RATING = "RATING"
    WORK_DUR = "WORK_DUR"
    PERCENT = "PERCENT"
    MILLISEC = "MILLISEC"


ERROR_STATUS = "ERROR"


@dataclass(slots=True)
class QualityGate:
    """A quality gate as listed by the server, with its raw configuration."""

    id: str
    name: str
    is_default: bool = False
    conf: str = ""

    def conf_dict(self) -> Dict[str, Any]:
        """Return the stored configuration decoded back into a mapping."""

        return json.loads(self.conf) if self.conf else {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "default": self.is_default,
            "conf": self.conf_dict(),
        }


@dataclass(slots=True)
class Metric:
    """Descriptor of a metric referenced by a condition."""

    key: str
    name: str
    type: str


@dataclass(slots=True)
class Condition:
    """One evaluated condition of the project's quality gate."""

    metric_key: str
    status: str
    comparator: Optional[str] = None
    error_threshold: Optional[str] = None
    actual_value: Optional[str] = None
    metric: Optional[Metric] = None

    def is_failure(self) -> bool:
        """Return ``True`` when the server flagged the condition as failing."""

        return self.status == ERROR_STATUS


@dataclass(slots=True)
class QualityGateReport:
    """Everything the report needs to describe a project's quality gate."""

    project: str
    branch: Optional[str]
    gates: List[QualityGate] = field(default_factory=list)
    project_gate: Optional[QualityGate] = None
    status: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the report for JSON output."""

        return {
            "project": self.project,
            "branch": self.branch,
            "quality_gates": [gate.to_dict() for gate in self.gates],
            "project_quality_gate": self.project_gate.name if self.project_gate else None,
            "status": dict(self.status),
        }
