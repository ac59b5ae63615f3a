from __future__ import annotations

import sys
from pathlib import Path

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from shared.exceptions import ResponseFormatError
from sonar import ClientGateService, StandaloneGateService, build_gate_service
from sonar.schemas import ListWsResponse


def test_build_follows_settings_by_default(settings, http_client) -> None:
    assert isinstance(build_gate_service(settings, http_client=http_client), StandaloneGateService)
    typed = settings.model_copy(update={"standalone": False})
    assert isinstance(build_gate_service(typed, http_client=http_client), ClientGateService)


def test_explicit_mode_overrides_settings(settings, http_client) -> None:
    service = build_gate_service(settings, standalone=False, http_client=http_client)
    assert isinstance(service, ClientGateService)


def test_service_owns_the_client_it_creates(settings) -> None:
    service = build_gate_service(settings)
    service.close()
    assert service.http.is_closed


@pytest.mark.parametrize("standalone", [True, False])
def test_both_transports_return_equivalent_models(settings, http_client, standalone) -> None:
    service = build_gate_service(settings, standalone=standalone, http_client=http_client)

    listing = service.list_gates()
    assert isinstance(listing, ListWsResponse)
    assert listing.default == "B"
    assert [gate.name for gate in listing.qualitygates] == ["Sonar way", "Strict"]
    assert service.show_gate("Strict").raw()["id"] == "B"
    assert service.project_component().quality_gate.key == "B"
    conditions = service.project_status().project_status.conditions
    assert [c.metric_key for c in conditions] == [
        "new_coverage",
        "new_reliability_rating",
        "new_technical_debt",
    ]
    assert conditions[0].actual_value == "45.04"
    metric = service.metric("new_technical_debt").first_metric()
    assert (metric.name, metric.type) == ("Added Technical Debt", "WORK_DUR")


@pytest.mark.parametrize("standalone", [True, False])
def test_both_transports_hit_the_same_urls(settings, http_client, fake_sonar, standalone) -> None:
    service = build_gate_service(settings, standalone=standalone, http_client=http_client)

    service.show_gate("Sonar way")
    service.metric("new_coverage")

    show, metric = fake_sonar.requests
    assert show.url.path == "/api/qualitygates/show"
    assert show.url.params["name"] == "Sonar way"
    assert metric.url.path == "/api/measures/component"
    assert dict(metric.url.params) == {
        "component": "acme:app",
        "metricKeys": "new_coverage",
        "additionalFields": "metrics",
    }


def test_missing_fields_raise_format_error(settings, http_client, fake_sonar) -> None:
    fake_sonar.overrides["/api/navigation/component"] = httpx.Response(200, json={"key": "acme"})
    service = build_gate_service(settings, http_client=http_client)

    with pytest.raises(ResponseFormatError):
        service.project_component()
