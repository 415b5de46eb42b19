"""Verdict data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..constants import LocationTag, Reason, Severity
from .scripts import ScriptTag


@dataclass(frozen=True)
class Verdict:
    """Result of evaluating one hostname, link or text fragment."""

    suspicious: bool
    reason: Optional[Reason]
    canonical_form: str
    original_form: str = ""
    matched_scripts: frozenset[ScriptTag] = field(default_factory=frozenset)
    matched_terms: tuple[str, ...] = ()
    reasons: tuple[Reason, ...] = ()
    severity: Severity = Severity.NONE
    location: Optional[LocationTag] = None
    details: tuple[str, ...] = ()

    @classmethod
    def clean(
        cls,
        original: str,
        canonical: str | None = None,
        *,
        matched_scripts: Iterable[ScriptTag] = (),
        location: Optional[LocationTag] = None,
        details: Iterable[str] = (),
    ) -> "Verdict":
        """Build a non-suspicious verdict."""
        return cls(
            suspicious=False,
            reason=None,
            canonical_form=original if canonical is None else canonical,
            original_form=original,
            matched_scripts=frozenset(matched_scripts),
            location=location,
            details=tuple(details),
        )

    @property
    def script_names(self) -> list[str]:
        return sorted(tag.name for tag in self.matched_scripts)

    @property
    def is_decoded(self) -> bool:
        """Whether the canonical form differs from what was displayed."""
        return self.canonical_form != self.original_form

    @property
    def alert_key(self) -> str:
        """Case-folded dedup key for this verdict (empty when there is nothing to alert on)."""
        if not self.suspicious:
            return ""
        if self.location is not None:
            terms = "|".join(self.matched_terms) or self.canonical_form
            return f"{self.location.value}:{terms}".casefold()
        return self.canonical_form.strip().casefold()

    def to_dict(self) -> dict:
        return {
            "suspicious": self.suspicious,
            "reason": self.reason.value if self.reason else None,
            "reasons": [r.value for r in self.reasons],
            "severity": str(self.severity),
            "canonical_form": self.canonical_form,
            "original_form": self.original_form,
            "matched_scripts": self.script_names,
            "matched_terms": list(self.matched_terms),
            "location": self.location.value if self.location else None,
            "details": list(self.details),
        }


@dataclass(frozen=True)
class ScanResult:
    """A verdict plus whether the session should surface it."""

    verdict: Verdict
    alert: bool = False

    @property
    def suspicious(self) -> bool:
        return self.verdict.suspicious
