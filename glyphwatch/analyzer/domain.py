"""Domain verdicts: punycode decoding plus script checks on the decoded host."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping

from rapidfuzz import fuzz

from ..constants import Reason, Severity, primary_reason
from ..utils.domains import is_private_host, registered_label
from .homoglyphs import fold_homoglyphs
from .models import Verdict
from .punycode import decode_hostname
from .scripts import ScriptClassifier

logger = logging.getLogger(__name__)

DEFAULT_PRIVATE_PREFIXES: tuple[str, ...] = ("127.", "192.168.", "10.")

_NON_LATIN_HOST_RE = re.compile(r"[^A-Za-z0-9.\-]")


class DomainVerdictEngine:
    """Decides whether a hostname is a homograph impersonation attempt."""

    def __init__(
        self,
        classifier: ScriptClassifier | None = None,
        *,
        private_prefixes: Iterable[str] = DEFAULT_PRIVATE_PREFIXES,
        brands: Iterable[str] = (),
        homoglyphs: Mapping[str, str] | None = None,
        mixed_script_check: bool = True,
        brand_similarity_threshold: int = 85,
    ):
        self.classifier = classifier or ScriptClassifier()
        self.private_prefixes = tuple(p.strip().lower() for p in private_prefixes if p and p.strip())
        self.brands = [b.strip().lower() for b in brands if b and b.strip()]
        self.homoglyphs = homoglyphs
        self.mixed_script_check = mixed_script_check
        self.brand_similarity_threshold = brand_similarity_threshold

    def evaluate_domain(self, hostname: str) -> Verdict:
        """Evaluate one hostname (ACE or Unicode form)."""
        original = hostname or ""
        host = original.strip()

        if is_private_host(host, self.private_prefixes):
            return Verdict.clean(original, host, details=["Local or private host"])

        decoded = decode_hostname(host)
        scripts = self.classifier.scripts_of(decoded)

        reasons: list[Reason] = []
        details: list[str] = []

        if _NON_LATIN_HOST_RE.search(decoded):
            reasons.append(Reason.NON_LATIN_CHARS)
            details.append(f"Non-Latin characters in decoded host: {decoded}")

        # A host written entirely in one non-Latin script only trips the check above
        if self.mixed_script_check and len(scripts) > 1:
            reasons.append(Reason.MIXED_SCRIPT)
            names = ", ".join(sorted(tag.name for tag in scripts))
            details.append(f"Mixed scripts in host: {names}")

        if not reasons:
            return Verdict.clean(original, decoded, matched_scripts=scripts)

        if decoded != host:
            details.append(f"Displayed as {host}, actually {decoded}")

        brands = self._match_brands(decoded)
        for brand in brands:
            details.append(f"Looks like '{brand}'")

        if brands or Reason.MIXED_SCRIPT in reasons:
            severity = Severity.HIGH
        else:
            severity = Severity.MEDIUM

        primary = primary_reason(reasons)
        reasons.sort(key=lambda r: r != primary)
        return Verdict(
            suspicious=True,
            reason=primary,
            canonical_form=decoded,
            original_form=original,
            matched_scripts=frozenset(scripts),
            matched_terms=tuple(brands),
            reasons=tuple(reasons),
            severity=severity,
            details=tuple(details),
        )

    def _match_brands(self, decoded: str) -> list[str]:
        """Brands the homoglyph-folded host imitates."""
        if not self.brands:
            return []

        folded = fold_homoglyphs(decoded, self.homoglyphs)
        label = "".join(ch for ch in registered_label(folded) if ch.isalnum())
        if not label:
            return []

        matched: list[str] = []
        for brand in self.brands:
            key = "".join(ch for ch in brand if ch.isalnum())
            if not key:
                continue
            # Short brand names only count on an exact label match
            if key == label or (len(key) >= 4 and key in label):
                matched.append(brand)
                continue
            ratio = fuzz.ratio(key, label)
            if ratio >= self.brand_similarity_threshold:
                logger.debug("Host label %r is %.0f%% similar to %r", label, ratio, brand)
                matched.append(brand)
        return matched
