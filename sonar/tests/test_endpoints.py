from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sonar import endpoints
from sonar.client import MeasuresComponentRequest, ProjectStatusRequest, ShowRequest


def test_list_request_ignores_branch() -> None:
    url = endpoints.build_request(
        endpoints.GET_QUALITY_GATES_REQUEST, "https://sonar.test/", branch="dev"
    )
    assert url == "https://sonar.test/api/qualitygates/list"


def test_gate_names_are_url_encoded() -> None:
    url = endpoints.build_request(
        endpoints.GET_QUALITY_GATES_DETAILS_REQUEST, "https://sonar.test", name="Sonar way & co"
    )
    assert url == "https://sonar.test/api/qualitygates/show?name=Sonar%20way%20%26%20co"


def test_branch_parameter_is_appended_only_when_set() -> None:
    without = endpoints.build_request(
        endpoints.GET_QUALITY_GATE_STATUS_REQUEST, "https://sonar.test", project="acme:app"
    )
    with_branch = endpoints.build_request(
        endpoints.GET_QUALITY_GATE_STATUS_REQUEST,
        "https://sonar.test",
        branch="feature/x",
        project="acme:app",
    )
    assert without == "https://sonar.test/api/qualitygates/project_status?projectKey=acme%3Aapp"
    assert with_branch == without + "&branch=feature%2Fx"


def test_metric_request() -> None:
    url = endpoints.build_request(
        endpoints.GET_METRIC_REQUEST,
        "https://sonar.test",
        branch="main",
        project="acme",
        metric="new_coverage",
    )
    assert url == (
        "https://sonar.test/api/measures/component?component=acme"
        "&metricKeys=new_coverage&additionalFields=metrics&branch=main"
    )


def test_unknown_template() -> None:
    with pytest.raises(ValueError):
        endpoints.build_request("GET_NOTHING", "https://sonar.test")


def test_typed_requests_drop_empty_fields() -> None:
    assert ShowRequest(name="Strict").to_params() == {"name": "Strict"}
    assert ProjectStatusRequest(project_key="acme").to_params() == {"projectKey": "acme"}
    assert MeasuresComponentRequest(
        component="acme",
        branch="dev",
        metric_keys=["a", "b"],
        additional_fields=["metrics"],
    ).to_params() == {
        "component": "acme",
        "branch": "dev",
        "metricKeys": "a,b",
        "additionalFields": "metrics",
    }
