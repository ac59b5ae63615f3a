"""Typed SonarQube web service client.

Each web service is exposed as a small service object taking a request object and
returning a validated response model, e.g.::

    client = SonarClient("https://sonar.example.com", http_client)
    gates = client.qualitygates().list(ListRequest())
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Dict, List, Optional, Type

import httpx

from .http import get_json
from .schemas import (
    ComponentResponse,
    ListWsResponse,
    MeasuresComponentResponse,
    ModelT,
    ProjectStatusResponse,
    ShowWsResponse,
    parse_payload,
)


@dataclass
class WsRequest:
    """Base request; non-empty fields become query parameters."""

    # Wire names for fields whose Python name differs.
    _aliases = {
        "project_key": "projectKey",
        "metric_keys": "metricKeys",
        "additional_fields": "additionalFields",
    }

    def to_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is None or value == [] or value == "":
                continue
            if isinstance(value, list):
                value = ",".join(value)
            params[self._aliases.get(item.name, item.name)] = str(value)
        return params


@dataclass
class ListRequest(WsRequest):
    pass


@dataclass
class ShowRequest(WsRequest):
    name: Optional[str] = None
    id: Optional[str] = None


@dataclass
class ProjectStatusRequest(WsRequest):
    project_key: Optional[str] = None
    branch: Optional[str] = None


@dataclass
class ComponentRequest(WsRequest):
    component: Optional[str] = None
    branch: Optional[str] = None


@dataclass
class MeasuresComponentRequest(WsRequest):
    component: Optional[str] = None
    branch: Optional[str] = None
    metric_keys: List[str] = field(default_factory=list)
    additional_fields: List[str] = field(default_factory=list)


class _WsService:
    path: str = ""

    def __init__(self, client: "SonarClient") -> None:
        self._client = client

    def _call(self, action: str, request: WsRequest, model: Type[ModelT]) -> ModelT:
        url = f"{self._client.base_url}/{self.path}/{action}"
        payload = get_json(self._client.http, url, params=request.to_params())
        return parse_payload(model, payload, url=url)


class QualityGatesService(_WsService):
    path = "api/qualitygates"

    def list(self, request: ListRequest) -> ListWsResponse:
        return self._call("list", request, ListWsResponse)

    def show(self, request: ShowRequest) -> ShowWsResponse:
        return self._call("show", request, ShowWsResponse)

    def project_status(self, request: ProjectStatusRequest) -> ProjectStatusResponse:
        return self._call("project_status", request, ProjectStatusResponse)


class NavigationService(_WsService):
    path = "api/navigation"

    def component(self, request: ComponentRequest) -> ComponentResponse:
        return self._call("component", request, ComponentResponse)


class MeasuresService(_WsService):
    path = "api/measures"

    def component(self, request: MeasuresComponentRequest) -> MeasuresComponentResponse:
        return self._call("component", request, MeasuresComponentResponse)


class SonarClient:
    """Entry point grouping the web services used by the report."""

    def __init__(self, base_url: str, http: httpx.Client) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = http

    def qualitygates(self) -> QualityGatesService:
        return QualityGatesService(self)

    def navigation(self) -> NavigationService:
        return NavigationService(self)

    def measures(self) -> MeasuresService:
        return MeasuresService(self)
