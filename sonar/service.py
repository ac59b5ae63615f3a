"""Gate service: the remote calls behind the quality gate report.

Two implementations answer the same calls. :class:`StandaloneGateService` builds
request URLs by hand from :mod:`sonar.endpoints`; :class:`ClientGateService` goes
through the typed :class:`sonar.client.SonarClient`. The choice is made once, when
the service is built.
"""
from __future__ import annotations

import abc
import logging
from typing import Optional

import httpx

from shared.config import Settings

from . import endpoints
from .client import (
    ComponentRequest,
    ListRequest,
    MeasuresComponentRequest,
    ProjectStatusRequest,
    ShowRequest,
    SonarClient,
)
from .http import get_json, new_http_client
from .schemas import (
    ComponentResponse,
    ListWsResponse,
    MeasuresComponentResponse,
    ProjectStatusResponse,
    ShowWsResponse,
    parse_payload,
)

logger = logging.getLogger(__name__)

METRICS = "metrics"


class GateService(abc.ABC):
    """Remote calls needed to describe a project's quality gate."""

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.settings = settings
        self.server = settings.base_url
        self.project = settings.project
        self.branch = settings.branch
        self._owns_client = http_client is None
        self.http = http_client or new_http_client(settings)

    def close(self) -> None:
        if self._owns_client:
            self.http.close()

    @abc.abstractmethod
    def list_gates(self) -> ListWsResponse:
        """Return every quality gate and the id of the default one."""

    @abc.abstractmethod
    def show_gate(self, name: str) -> ShowWsResponse:
        """Return the full configuration of the gate called ``name``."""

    @abc.abstractmethod
    def project_component(self) -> ComponentResponse:
        """Return the project's navigation metadata, including its gate key."""

    @abc.abstractmethod
    def project_status(self) -> ProjectStatusResponse:
        """Return the evaluated conditions of the project's gate."""

    @abc.abstractmethod
    def metric(self, metric_key: str) -> MeasuresComponentResponse:
        """Return the descriptor of ``metric_key`` for the project."""


class StandaloneGateService(GateService):
    """Issues hand-built request URLs."""

    def _fetch(self, request_name: str, model, **values: str):
        url = endpoints.build_request(request_name, self.server, branch=self.branch, **values)
        return parse_payload(model, get_json(self.http, url), url=url)

    def list_gates(self) -> ListWsResponse:
        return self._fetch(endpoints.GET_QUALITY_GATES_REQUEST, ListWsResponse)

    def show_gate(self, name: str) -> ShowWsResponse:
        # Gate details do not depend on the branch.
        url = endpoints.build_request(endpoints.GET_QUALITY_GATES_DETAILS_REQUEST, self.server, name=name)
        return parse_payload(ShowWsResponse, get_json(self.http, url), url=url)

    def project_component(self) -> ComponentResponse:
        return self._fetch(endpoints.GET_PROJECT_REQUEST, ComponentResponse, project=self.project)

    def project_status(self) -> ProjectStatusResponse:
        return self._fetch(
            endpoints.GET_QUALITY_GATE_STATUS_REQUEST, ProjectStatusResponse, project=self.project
        )

    def metric(self, metric_key: str) -> MeasuresComponentResponse:
        return self._fetch(
            endpoints.GET_METRIC_REQUEST,
            MeasuresComponentResponse,
            project=self.project,
            metric=metric_key,
        )


class ClientGateService(GateService):
    """Goes through the typed web service client."""

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        super().__init__(settings, http_client)
        self.client = SonarClient(self.server, self.http)

    def list_gates(self) -> ListWsResponse:
        return self.client.qualitygates().list(ListRequest())

    def show_gate(self, name: str) -> ShowWsResponse:
        return self.client.qualitygates().show(ShowRequest(name=name))

    def project_component(self) -> ComponentResponse:
        request = ComponentRequest(component=self.project, branch=self.branch)
        return self.client.navigation().component(request)

    def project_status(self) -> ProjectStatusResponse:
        request = ProjectStatusRequest(project_key=self.project, branch=self.branch)
        return self.client.qualitygates().project_status(request)

    def metric(self, metric_key: str) -> MeasuresComponentResponse:
        request = MeasuresComponentRequest(
            component=self.project,
            branch=self.branch,
            metric_keys=[metric_key],
            additional_fields=[METRICS],
        )
        return self.client.measures().component(request)


def build_gate_service(
    settings: Settings,
    *,
    standalone: Optional[bool] = None,
    http_client: Optional[httpx.Client] = None,
) -> GateService:
    """Return the gate service matching ``standalone`` (defaults to the settings)."""

    if standalone is None:
        standalone = settings.standalone
    service_cls = StandaloneGateService if standalone else ClientGateService
    logger.debug("Using %s for %s", service_cls.__name__, settings.base_url)
    return service_cls(settings, http_client)
