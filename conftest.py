from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import httpx
import pytest

from shared.config import Settings

SERVER = "https://sonar.example.test"


@dataclass
class FakeSonarQube:
    """In-memory SonarQube answering the quality gate web services."""

    gates: List[Dict[str, Any]] = field(
        default_factory=lambda: [{"id": "A", "name": "Sonar way"}, {"id": "B", "name": "Strict"}]
    )
    default: Any = "B"
    project_gate: Any = "B"
    conditions: List[Dict[str, Any]] = field(
        default_factory=lambda: [
            {
                "status": "ERROR",
                "metricKey": "new_coverage",
                "comparator": "LT",
                "errorThreshold": "80",
                "actualValue": "45.04",
            },
            {
                "status": "OK",
                "metricKey": "new_reliability_rating",
                "comparator": "GT",
                "errorThreshold": "1",
                "actualValue": "1",
            },
            {
                "status": "ERROR",
                "metricKey": "new_technical_debt",
                "comparator": "GT",
                "errorThreshold": "60",
                "actualValue": "490",
            },
        ]
    )
    metrics: Dict[str, Tuple[str, str]] = field(
        default_factory=lambda: {
            "new_coverage": ("Coverage on New Code", "PERCENT"),
            "new_reliability_rating": ("Reliability Rating on New Code", "RATING"),
            "new_technical_debt": ("Added Technical Debt", "WORK_DUR"),
            "new_duplicated_lines_density": ("Duplicated Lines (%) on New Code", "PERCENT"),
        }
    )
    requests: List[httpx.Request] = field(default_factory=list)
    overrides: Dict[str, httpx.Response] = field(default_factory=dict)

    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        params = request.url.params
        if path in self.overrides:
            return self.overrides[path]
        if path == "/api/qualitygates/list":
            return httpx.Response(200, json={"default": self.default, "qualitygates": self.gates})
        if path == "/api/qualitygates/show":
            name = params.get("name")
            gate = next((g for g in self.gates if g["name"] == name), None)
            if gate is None:
                return httpx.Response(
                    404, json={"errors": [{"msg": f"No quality gate named '{name}'"}]}
                )
            return httpx.Response(
                200,
                json={
                    "id": gate["id"],
                    "name": gate["name"],
                    "conditions": [{"metric": "new_coverage", "op": "LT", "error": "80"}],
                },
            )
        if path == "/api/navigation/component":
            return httpx.Response(
                200,
                json={"key": params.get("component"), "qualityGate": {"key": self.project_gate}},
            )
        if path == "/api/qualitygates/project_status":
            return httpx.Response(
                200,
                json={"projectStatus": {"status": "ERROR", "conditions": self.conditions}},
            )
        if path == "/api/measures/component":
            key = params.get("metricKeys")
            if key not in self.metrics:
                return httpx.Response(
                    400, json={"errors": [{"msg": f"The following metric keys are not found: {key}"}]}
                )
            name, metric_type = self.metrics[key]
            return httpx.Response(
                200,
                json={
                    "component": {"key": params.get("component"), "measures": []},
                    "metrics": [{"key": key, "name": name, "type": metric_type}],
                },
            )
        return httpx.Response(404, json={"errors": [{"msg": "Unknown url"}]})


@pytest.fixture()
def fake_sonar() -> FakeSonarQube:
    return FakeSonarQube()


@pytest.fixture()
def settings() -> Settings:
    return Settings(server=SERVER, project="acme:app", branch=None, token=None)


@pytest.fixture()
def http_client(fake_sonar: FakeSonarQube):
    client = httpx.Client(transport=httpx.MockTransport(fake_sonar.handler))
    yield client
    client.close()
