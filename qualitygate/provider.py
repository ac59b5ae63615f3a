"""Quality gate data provider."""
from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional

import httpx

from shared.config import Settings, get_settings
from shared.exceptions import ResponseFormatError, UnknownQualityGateError
from shared.models import Condition, Metric, QualityGate, QualityGateReport
from sonar.schemas import ConditionPayload
from sonar.service import GateService, build_gate_service

from .formatting import explain
from .telemetry import increment_failure_metric

logger = logging.getLogger(__name__)


class QualityGateProvider:
    """Collect quality gates and the gate status of one project."""

    def __init__(self, service: GateService) -> None:
        self.service = service

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        *,
        standalone: Optional[bool] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> "QualityGateProvider":
        settings = settings or get_settings()
        return cls(build_gate_service(settings, standalone=standalone, http_client=http_client))

    def close(self) -> None:
        self.service.close()

    def __enter__(self) -> "QualityGateProvider":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def project(self) -> str:
        return self.service.project

    @property
    def branch(self) -> Optional[str]:
        return self.service.branch

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def list_quality_gates(self) -> List[QualityGate]:
        """Return every quality gate with its configuration and default flag."""

        listing = self.service.list_gates()
        default_id = listing.default
        gates: List[QualityGate] = []
        for summary in listing.qualitygates:
            details = self.service.show_gate(summary.name)
            gates.append(
                QualityGate(
                    id=summary.id,
                    name=summary.name,
                    is_default=summary.id == default_id,
                    conf=json.dumps(details.raw()),
                )
            )
        logger.info("Listed %s quality gates (default=%s)", len(gates), default_id)
        return gates

    def resolve_project_gate(self) -> QualityGate:
        """Return the quality gate assigned to the project.

        Raises:
            UnknownQualityGateError: the project's gate is not in the listing.
        """

        gates = self.list_quality_gates()
        key = self.service.project_component().quality_gate.key
        match = next((gate for gate in gates if gate.id == key), None)
        if match is None:
            logger.error("Project %s uses unknown quality gate %s", self.project, key)
            raise UnknownQualityGateError(key)
        logger.info("Project %s uses quality gate %s", self.project, match.name)
        return match

    def fetch_conditions(self) -> List[Condition]:
        """Return the project's evaluated conditions with their metric descriptors."""

        status = self.service.project_status()
        conditions: List[Condition] = []
        for payload in status.project_status.conditions:
            descriptor = self.service.metric(payload.metric_key).first_metric()
            conditions.append(self._build_condition(payload, descriptor.name, descriptor.type))
        return conditions

    def fetch_status(self) -> Dict[str, str]:
        """Map each condition's metric name to its status text, in server order.

        Failing conditions get an explanation appended to their status. Two metrics
        sharing a display name keep the later status only.
        """

        result: Dict[str, str] = {}
        for condition in self.fetch_conditions():
            result[condition.metric.name] = self._status_text(condition)
        return result

    def build_report(self) -> QualityGateReport:
        """Gather gates, the project's gate and its status in one report."""

        report = QualityGateReport(project=self.project, branch=self.branch)
        report.gates = self.list_quality_gates()
        report.project_gate = self.resolve_project_gate()
        report.status = self.fetch_status()
        return report

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _build_condition(self, payload: ConditionPayload, name: str, metric_type: str) -> Condition:
        return Condition(
            metric_key=payload.metric_key,
            status=payload.status,
            comparator=payload.comparator,
            error_threshold=payload.error_threshold,
            actual_value=payload.actual_value,
            metric=Metric(key=payload.metric_key, name=name, type=metric_type),
        )

    def _status_text(self, condition: Condition) -> str:
        if not condition.is_failure():
            return condition.status
        if condition.actual_value is None or condition.error_threshold is None:
            raise ResponseFormatError(
                f"Failing condition on {condition.metric_key} lacks its actual value or threshold"
            )
        try:
            explanation = explain(
                condition.actual_value,
                condition.error_threshold,
                condition.comparator or "",
                condition.metric.type,
            )
        except (ValueError, ArithmeticError) as exc:
            raise ResponseFormatError(
                f"Failing condition on {condition.metric_key} has a non-numeric value: {exc}"
            ) from exc
        increment_failure_metric(condition.metric_key)
        logger.warning("Condition %s failed%s", condition.metric.name, explanation)
        return condition.status + explanation
