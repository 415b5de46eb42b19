"""Scan metrics tracking.

Counts how often each engine runs and which reasons fire, so the keyword
and brand lists can be tuned from real traffic.
"""

import threading
from collections import defaultdict
from datetime import datetime


class ScanMetrics:
    """Thread-safe counters for one scan session."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._scans: dict[str, int] = defaultdict(int)
        self._suspicious: dict[str, int] = defaultdict(int)
        self._reasons: dict[str, int] = defaultdict(int)
        self._alerts: int = 0
        self._suppressed: int = 0
        self._started: datetime = datetime.now()

    def record_scan(self, kind: str, reason: str | None = None) -> None:
        """Record one evaluation; ``reason`` is set when it was suspicious."""
        with self._lock:
            self._scans[kind] += 1
            if reason:
                self._suspicious[kind] += 1
                self._reasons[reason] += 1

    def record_alert(self, raised: bool) -> None:
        """Record a suspicious verdict that was either surfaced or deduplicated."""
        with self._lock:
            if raised:
                self._alerts += 1
            else:
                self._suppressed += 1

    def get_summary(self) -> dict:
        """Get a summary of all metrics."""
        with self._lock:
            uptime = datetime.now() - self._started
            return {
                "uptime_seconds": int(uptime.total_seconds()),
                "total_scans": sum(self._scans.values()),
                "scans": dict(self._scans),
                "suspicious": dict(self._suspicious),
                "reasons": dict(self._reasons),
                "alerts_raised": self._alerts,
                "alerts_suppressed": self._suppressed,
            }

    def reset(self) -> None:
        """Reset all metrics."""
        with self._lock:
            self._scans.clear()
            self._suspicious.clear()
            self._reasons.clear()
            self._alerts = 0
            self._suppressed = 0
            self._started = datetime.now()
