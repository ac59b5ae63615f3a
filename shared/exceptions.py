"""Errors raised while talking to the SonarQube server."""
from __future__ import annotations

from typing import List, Optional


class SonarQubeError(RuntimeError):
    """Base class for every failure surfaced by the quality gate layer."""


class BadRequestError(SonarQubeError):
    """Raised when the server rejects a request it does not understand."""

    def __init__(self, message: str, *, url: str = "", messages: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.url = url
        self.messages = list(messages or [])


class ServerUnreachableError(SonarQubeError):
    """Raised when the server cannot be reached or answers with a failure status."""

    def __init__(self, message: str, *, url: str = "", status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ResponseFormatError(SonarQubeError):
    """Raised when a response body does not match the expected payload."""


class UnknownQualityGateError(SonarQubeError):
    """Raised when a project references a quality gate missing from the listing."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown quality gate: {key}")
        self.key = key
