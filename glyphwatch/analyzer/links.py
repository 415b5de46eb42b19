"""Link verdicts: a hyperlink's host plus everything the reader sees of it."""

from __future__ import annotations

import logging

from ..constants import Reason, Severity
from ..utils.domains import extract_hostname, is_private_host, resolve_url
from .domain import DomainVerdictEngine
from .models import Verdict
from .punycode import decode_hostname

logger = logging.getLogger(__name__)


class LinkVerdictEngine:
    """Checks an anchor's href, resolved URL, decoded host and link text together."""

    def __init__(self, domain_engine: DomainVerdictEngine | None = None):
        self.domain_engine = domain_engine or DomainVerdictEngine()

    @property
    def classifier(self):
        return self.domain_engine.classifier

    def evaluate_link(self, href: str, text: str = "", base_url: str | None = None) -> Verdict:
        raw = (href or "").strip()
        text = text or ""
        try:
            resolved = resolve_url(raw, base_url)
        except ValueError as exc:
            logger.debug("Could not resolve href %r: %s", raw, exc)
            resolved = ""

        hostname = extract_hostname(resolved) if resolved else ""
        private = bool(hostname) and is_private_host(hostname, self.domain_engine.private_prefixes)
        # Private hosts skip the domain verdict but not the visible-text check
        if hostname and not private:
            verdict = self.domain_engine.evaluate_domain(hostname)
            if verdict.suspicious:
                return verdict

        decoded = decode_hostname(hostname)
        checks = [part for part in (raw, text, decoded, resolved) if part]
        combined = " ".join(checks)
        scripts = self.classifier.scripts_of(combined)
        canonical = decoded or resolved or raw

        if len(scripts) > 1:
            names = ", ".join(sorted(tag.name for tag in scripts))
            return Verdict(
                suspicious=True,
                reason=Reason.MIXED_SCRIPT,
                canonical_form=canonical,
                original_form=resolved or raw or text,
                matched_scripts=frozenset(scripts),
                reasons=(Reason.MIXED_SCRIPT,),
                severity=Severity.MEDIUM,
                details=(f"Mixed-script link: {names}",),
            )

        details = ["Local or private host"] if private else []
        return Verdict.clean(resolved or raw, canonical, matched_scripts=scripts, details=details)
