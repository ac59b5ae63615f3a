"""SonarQube transports used by the quality gate report."""
from .service import (
    ClientGateService,
    GateService,
    StandaloneGateService,
    build_gate_service,
)

__all__ = [
    "ClientGateService",
    "GateService",
    "StandaloneGateService",
    "build_gate_service",
]
