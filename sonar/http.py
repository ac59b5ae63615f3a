"""httpx plumbing shared by both transports."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from shared.config import Settings
from shared.exceptions import BadRequestError, ResponseFormatError, ServerUnreachableError

logger = logging.getLogger(__name__)

USER_AGENT = "sonar-qualitygate-report/0.1"


def new_http_client(settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    """Build the client used to reach ``settings.server``."""

    auth = (settings.token, "") if settings.token else None
    return httpx.Client(
        auth=auth,
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        timeout=httpx.Timeout(settings.timeout_seconds, connect=min(10.0, settings.timeout_seconds)),
        follow_redirects=True,
        transport=transport,
    )


def _error_messages(payload: Any) -> List[str]:
    if not isinstance(payload, dict):
        return []
    errors = payload.get("errors")
    if not isinstance(errors, list):
        return []
    return [str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in errors]


def get_json(
    client: httpx.Client,
    url: str,
    params: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Issue a GET request and return the decoded JSON object.

    Transport failures and non-2xx answers become :class:`ServerUnreachableError`,
    except HTTP 400 which the server uses for malformed requests and which maps to
    :class:`BadRequestError`. A 2xx body carrying SonarQube's ``errors`` envelope is
    also treated as a bad request.
    """

    logger.debug("GET %s params=%s", url, dict(params or {}))
    try:
        response = client.get(url, params=params)
    except httpx.TransportError as exc:
        logger.error("SonarQube request failed: %s (%s)", url, exc)
        raise ServerUnreachableError(f"SonarQube server is not reachable: {exc}", url=url) from exc

    target = str(response.request.url)

    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None

    if response.status_code == httpx.codes.BAD_REQUEST:
        messages = _error_messages(payload)
        detail = "; ".join(messages) or response.text[:200]
        logger.error("SonarQube rejected %s: %s", target, detail)
        raise BadRequestError(f"Bad SonarQube request: {detail}", url=target, messages=messages)

    if response.is_error:
        logger.error("SonarQube answered %s for %s", response.status_code, target)
        raise ServerUnreachableError(
            f"SonarQube server is not callable (HTTP {response.status_code})",
            url=target,
            status_code=response.status_code,
        )

    if not isinstance(payload, dict):
        raise ResponseFormatError(f"Response from {target} is not a JSON object")

    messages = _error_messages(payload)
    if messages:
        logger.error("SonarQube reported errors for %s: %s", target, messages)
        raise BadRequestError(
            f"Bad SonarQube request: {'; '.join(messages)}", url=target, messages=messages
        )
    return payload
