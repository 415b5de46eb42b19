"""Session-scoped alert deduplication."""

from __future__ import annotations

import threading


def normalize_alert_key(key: str) -> str:
    return (key or "").strip()


class AlertAggregator:
    """
    Remembers which alert keys were already surfaced in this session.

    Keys never expire; the set is only cleared by ``reset()`` when the
    consuming page reloads. Membership is exact after stripping surrounding
    whitespace, so callers derive case-insensitive keys themselves
    (see ``Verdict.alert_key``).

    Usage:
        aggregator = AlertAggregator()
        if aggregator.claim(verdict.alert_key):
            show(verdict)
    """

    def __init__(self) -> None:
        self._alerted: set[str] = set()
        self._lock = threading.Lock()

    def should_alert(self, key: str) -> bool:
        """True until ``record_alerted`` has been called for ``key``."""
        normalized = normalize_alert_key(key)
        with self._lock:
            return normalized not in self._alerted

    def record_alerted(self, key: str) -> None:
        normalized = normalize_alert_key(key)
        with self._lock:
            self._alerted.add(normalized)

    def claim(self, key: str) -> bool:
        """Atomically check and record ``key``; True only for the first caller."""
        normalized = normalize_alert_key(key)
        with self._lock:
            if normalized in self._alerted:
                return False
            self._alerted.add(normalized)
            return True

    def reset(self) -> None:
        with self._lock:
            self._alerted.clear()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        with self._lock:
            return normalize_alert_key(key) in self._alerted

    def __len__(self) -> int:
        with self._lock:
            return len(self._alerted)
