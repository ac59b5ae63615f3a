"""URL templates used by the standalone transport."""
from __future__ import annotations

from typing import Dict, Optional
from urllib.parse import quote

GET_QUALITY_GATES_REQUEST = "GET_QUALITY_GATES_REQUEST"
GET_QUALITY_GATES_DETAILS_REQUEST = "GET_QUALITY_GATES_DETAILS_REQUEST"
GET_PROJECT_REQUEST = "GET_PROJECT_REQUEST"
GET_QUALITY_GATE_STATUS_REQUEST = "GET_QUALITY_GATE_STATUS_REQUEST"
GET_METRIC_REQUEST = "GET_METRIC_REQUEST"

# ``{branch}`` expands to an extra query parameter, or nothing on the main branch.
REQUESTS: Dict[str, str] = {
    GET_QUALITY_GATES_REQUEST: "{server}/api/qualitygates/list",
    GET_QUALITY_GATES_DETAILS_REQUEST: "{server}/api/qualitygates/show?name={name}",
    GET_PROJECT_REQUEST: "{server}/api/navigation/component?component={project}{branch}",
    GET_QUALITY_GATE_STATUS_REQUEST: (
        "{server}/api/qualitygates/project_status?projectKey={project}{branch}"
    ),
    GET_METRIC_REQUEST: (
        "{server}/api/measures/component?component={project}"
        "&metricKeys={metric}&additionalFields=metrics{branch}"
    ),
}


def _encode(value: str) -> str:
    return quote(value, safe="")


def build_request(request_name: str, server: str, *, branch: Optional[str] = None, **values: str) -> str:
    """Render the request template ``request_name`` with URL-encoded ``values``."""

    try:
        template = REQUESTS[request_name]
    except KeyError:
        raise ValueError(f"Unknown request template '{request_name}'") from None
    encoded = {key: _encode(value) for key, value in values.items()}
    branch_param = f"&branch={_encode(branch)}" if branch else ""
    return template.format(server=server.rstrip("/"), branch=branch_param, **encoded)
