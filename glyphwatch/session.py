"""Page-scoped scan session.

A collaborator (content script, mail client plugin, proxy) creates one
session per page load, feeds it every candidate string it finds, and
renders the results whose ``alert`` flag is set. ``reload()`` is called
when the page reloads; ``close()`` when it goes away.
"""

from __future__ import annotations

import logging

from .analyzer import (
    AlertAggregator,
    DomainVerdictEngine,
    LinkVerdictEngine,
    ScanMetrics,
    ScanResult,
    ScriptClassifier,
    TextVerdictEngine,
    Verdict,
)
from .config import Config
from .constants import LocationTag

logger = logging.getLogger(__name__)


class SessionClosedError(RuntimeError):
    """Raised when a closed session is asked to scan."""


class ScanSession:
    """Owns the engines and dedup state for one page lifecycle."""

    def __init__(self, config: Config | None = None):
        self.config = config or Config()
        self.classifier = ScriptClassifier(self.config.script_table())
        self.domain_engine = DomainVerdictEngine(
            self.classifier,
            private_prefixes=self.config.private_prefixes,
            brands=self.config.brands,
            homoglyphs=self.config.homoglyphs,
            mixed_script_check=self.config.mixed_script_check,
            brand_similarity_threshold=self.config.brand_similarity_threshold,
        )
        self.text_engine = TextVerdictEngine(
            self.config.keywords,
            self.config.brands,
            classifier=self.classifier,
            homoglyphs=self.config.homoglyphs,
            mixed_script_check=self.config.text_mixed_script_check,
        )
        self.link_engine = LinkVerdictEngine(self.domain_engine)
        self.aggregator = AlertAggregator()
        self.metrics = ScanMetrics()
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> "ScanSession":
        """Mark the session active; starting twice is a no-op."""
        if self._active:
            logger.debug("Scan session already active")
            return self
        self._active = True
        logger.debug("Scan session started")
        return self

    def reload(self) -> None:
        """Forget every alert raised so far (full page reload)."""
        self.aggregator.reset()
        self.metrics.reset()
        logger.debug("Scan session reloaded")

    def close(self) -> None:
        if not self._active:
            return
        self._active = False
        self.aggregator.reset()
        logger.debug("Scan session closed")

    def __enter__(self) -> "ScanSession":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def scan_domain(self, hostname: str) -> ScanResult:
        self._ensure_active()
        return self._finish("domain", self.domain_engine.evaluate_domain(hostname))

    def scan_text(self, text: str, location: LocationTag | str) -> ScanResult:
        self._ensure_active()
        return self._finish("text", self.text_engine.evaluate_text(text, location))

    def scan_link(self, href: str, text: str = "", base_url: str | None = None) -> ScanResult:
        self._ensure_active()
        return self._finish("link", self.link_engine.evaluate_link(href, text, base_url))

    def _ensure_active(self) -> None:
        if not self._active:
            raise SessionClosedError("Scan session is not active; call start() first")

    def _finish(self, kind: str, verdict: Verdict) -> ScanResult:
        self.metrics.record_scan(kind, verdict.reason.value if verdict.reason else None)
        if not verdict.suspicious:
            return ScanResult(verdict)

        alert = self.aggregator.claim(verdict.alert_key)
        self.metrics.record_alert(alert)
        if alert:
            logger.info(
                "Suspicious %s detected (%s, %s): %s",
                kind,
                verdict.reason.value,
                verdict.severity,
                verdict.canonical_form,
            )
        return ScanResult(verdict, alert=alert)
