"""Entry point for printing a project's quality gate report with ``python -m qualitygate``."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from shared.config import Settings, get_settings
from shared.exceptions import SonarQubeError
from shared.logs import configure_logging

from .provider import QualityGateProvider

logger = logging.getLogger(__name__)

SECTIONS = ("report", "gates", "project-gate", "status")


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="qualitygate",
        description="Print the quality gate status of a SonarQube project as JSON",
    )
    p.add_argument("section", nargs="?", choices=SECTIONS, default="report")
    p.add_argument("--server", help="SonarQube base URL (env: SONAR_SERVER)")
    p.add_argument("--token", help="SonarQube user token (env: SONAR_TOKEN)")
    p.add_argument("--project", help="Project key (env: SONAR_PROJECT)")
    p.add_argument("--branch", help="Project branch (env: SONAR_BRANCH)")
    mode = p.add_mutually_exclusive_group()
    mode.add_argument(
        "--standalone",
        dest="standalone",
        action="store_true",
        default=None,
        help="Build request URLs by hand",
    )
    mode.add_argument(
        "--client",
        dest="standalone",
        action="store_false",
        help="Use the typed web service client",
    )
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def resolve_settings(args: argparse.Namespace, base: Optional[Settings] = None) -> Settings:
    """Overlay command line flags on top of the environment settings."""

    base = base or get_settings()
    overrides: Dict[str, Any] = {
        key: value
        for key, value in {
            "server": args.server,
            "token": args.token,
            "project": args.project,
            "branch": args.branch,
            "standalone": args.standalone,
            "log_level": args.log_level,
        }.items()
        if value is not None
    }
    return base.model_copy(update=overrides)


def _collect(provider: QualityGateProvider, section: str) -> Any:
    if section == "gates":
        return [gate.to_dict() for gate in provider.list_quality_gates()]
    if section == "project-gate":
        return provider.resolve_project_gate().to_dict()
    if section == "status":
        return provider.fetch_status()
    return provider.build_report().to_dict()


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None, http_client=None) -> int:
    args = build_arg_parser().parse_args(argv)
    settings = resolve_settings(args, settings)
    configure_logging(settings.log_level)

    if not settings.project:
        logger.error("No project key given; pass --project or set SONAR_PROJECT")
        return 2

    try:
        with QualityGateProvider.from_settings(settings, http_client=http_client) as provider:
            payload = _collect(provider, args.section)
    except SonarQubeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
