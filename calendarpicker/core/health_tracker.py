"""Health tracking for the calendarpicker server."""

from __future__ import annotations

import os
import platform
import sys
import threading
import time
from dataclasses import dataclass


@dataclass
class HealthStatus:
    """Health status information for the server."""

    status: str  # "healthy"
    uptime_seconds: float
    pid: int
    requests_served: int
    failed_requests: int
    active_selections: int


@dataclass
class SystemDiagnostics:
    """System diagnostics information."""

    platform: str
    python_version: str


class HealthTracker:
    """Thread-safe request counters and uptime for monitoring."""

    def __init__(self) -> None:
        self._start_time: float = time.time()
        self._lock = threading.Lock()
        self._requests_served = 0
        self._failed_requests = 0

    def record_request(self, ok: bool) -> None:
        """Record a handled request.

        Args:
            ok: Whether the core operation succeeded
        """
        with self._lock:
            self._requests_served += 1
            if not ok:
                self._failed_requests += 1

    def get_uptime_seconds(self) -> float:
        return round(time.time() - self._start_time, 3)

    def get_health_status(self, active_selections: int) -> HealthStatus:
        """Build a health snapshot.

        Args:
            active_selections: Number of users currently holding a selection
        """
        with self._lock:
            served = self._requests_served
            failed = self._failed_requests
        return HealthStatus(
            status="healthy",
            uptime_seconds=self.get_uptime_seconds(),
            pid=os.getpid(),
            requests_served=served,
            failed_requests=failed,
            active_selections=active_selections,
        )


def get_system_diagnostics() -> SystemDiagnostics:
    return SystemDiagnostics(
        platform=platform.platform(),
        python_version=sys.version.split()[0],
    )
