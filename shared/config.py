"""Application-wide configuration helpers."""
from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from environment variables.

    The same object drives both transports and the command line entry point.
    The defaults assume a SonarQube instance running locally on its stock port.
    """

    model_config = SettingsConfigDict(
        env_prefix="SONAR_",
        env_file=os.environ.get("SONAR_ENV_FILE", ".env"),
        extra="ignore",
    )

    server: str = Field("http://localhost:9000", description="Base URL of the SonarQube server")
    token: Optional[str] = Field(None, description="User token sent as basic auth login")
    project: str = Field("", description="Key of the project to report on")
    branch: Optional[str] = Field(None, description="Branch of the project, if any")
    standalone: bool = Field(
        True, description="Use hand-built request URLs instead of the typed client"
    )
    timeout_seconds: float = Field(30.0, description="Timeout applied to every request")
    log_level: str = Field("INFO", description="Root log level for the CLI")

    @property
    def base_url(self) -> str:
        return self.server.rstrip("/")


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings so modules can share the same instance."""

    return Settings()  # type: ignore[call-arg]


def settings_dict() -> Dict[str, Any]:
    """Expose settings as primitives, hiding the token."""

    settings = get_settings()
    payload = settings.model_dump()
    if payload.get("token"):
        payload["token"] = "***"
    return payload
