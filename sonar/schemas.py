"""Pydantic models mirroring the SonarQube web service payloads we consume."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shared.exceptions import ResponseFormatError


class SonarPayload(BaseModel):
    # Older servers send numeric gate ids, newer ones strings.
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


class GateSummary(SonarPayload):
    id: str
    name: str


class ListWsResponse(SonarPayload):
    default: Optional[str] = None
    qualitygates: List[GateSummary] = Field(default_factory=list)


class ShowWsResponse(SonarPayload):
    """Gate details; the whole payload is kept since it is stored verbatim."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    def raw(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class AssignedGate(SonarPayload):
    key: str
    name: Optional[str] = None


class ComponentResponse(SonarPayload):
    quality_gate: AssignedGate = Field(alias="qualityGate")


class ConditionPayload(SonarPayload):
    status: str
    metric_key: str = Field(alias="metricKey")
    comparator: Optional[str] = None
    error_threshold: Optional[str] = Field(None, alias="errorThreshold")
    actual_value: Optional[str] = Field(None, alias="actualValue")


class ProjectStatus(SonarPayload):
    status: Optional[str] = None
    conditions: List[ConditionPayload] = Field(default_factory=list)


class ProjectStatusResponse(SonarPayload):
    project_status: ProjectStatus = Field(alias="projectStatus")


class MetricPayload(SonarPayload):
    key: Optional[str] = None
    name: str
    type: str


class MeasuresComponentResponse(SonarPayload):
    metrics: List[MetricPayload] = Field(default_factory=list)

    def first_metric(self) -> MetricPayload:
        if not self.metrics:
            raise ResponseFormatError("Metric lookup returned no metric descriptor")
        return self.metrics[0]


ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_payload(model: Type[ModelT], payload: Dict[str, Any], *, url: str = "") -> ModelT:
    """Validate ``payload`` against ``model`` and raise a domain error on mismatch."""

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ResponseFormatError(
            f"Unexpected {model.__name__} payload from {url or 'server'}: {exc}"
        ) from exc
