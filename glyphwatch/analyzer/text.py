"""Text verdicts: brand/urgency keywords spelled with lookalike characters.

Raw non-Latin detection over prose is too noisy (names, foreign-language
mail), so text is gated on a curated term list first, and only tokens that
both match a term and carry non-Latin characters are reported.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping

from ..constants import LocationTag, Reason, Severity
from .homoglyphs import fold_homoglyphs
from .models import Verdict
from .scripts import ScriptClassifier

logger = logging.getLogger(__name__)

_NON_LATIN_TOKEN_RE = re.compile(r"""[^A-Za-z0-9.\-\s,;:!?'"()\[\]{}]""")


class TextVerdictEngine:
    """Flags subject/sender/body text that disguises keywords or brand names."""

    def __init__(
        self,
        keywords: Iterable[str] = (),
        brands: Iterable[str] = (),
        *,
        classifier: ScriptClassifier | None = None,
        homoglyphs: Mapping[str, str] | None = None,
        mixed_script_check: bool = False,
    ):
        self.keywords = _clean_terms(keywords)
        self.brands = _clean_terms(brands)
        self.terms = self.keywords + [b for b in self.brands if b not in self.keywords]
        self.classifier = classifier or ScriptClassifier()
        self.homoglyphs = homoglyphs
        self.mixed_script_check = mixed_script_check

    def evaluate_text(self, text: str, location: LocationTag | str) -> Verdict:
        """Evaluate one text fragment found at ``location``."""
        try:
            location = LocationTag.coerce(location)
        except ValueError:
            logger.debug("Unknown text location %r, treating as page text", location)
            location = LocationTag.PAGE_TEXT
        text = text or ""
        lowered = text.lower()
        folded = fold_homoglyphs(text, self.homoglyphs)

        if not self._contains_term(lowered) and not self._contains_term(folded):
            return Verdict.clean(text, folded, location=location)

        matched_tokens: list[str] = []
        matched_brands: list[str] = []
        for token in text.split():
            hits = self._token_terms(token)
            if not hits or not _NON_LATIN_TOKEN_RE.search(token):
                continue
            if token not in matched_tokens:
                matched_tokens.append(token)
            matched_brands.extend(h for h in hits if h in self.brands and h not in matched_brands)

        if matched_tokens:
            severity = Severity.HIGH if matched_brands else Severity.MEDIUM
            details = [f"Lookalike characters in {location.label}: {', '.join(matched_tokens)}"]
            details.extend(f"Imitates brand '{brand}'" for brand in matched_brands)
            return Verdict(
                suspicious=True,
                reason=Reason.BRAND_KEYWORD_HOMOGLYPH,
                canonical_form=folded,
                original_form=text,
                matched_scripts=frozenset(self.classifier.scripts_of(" ".join(matched_tokens))),
                matched_terms=tuple(matched_tokens),
                reasons=(Reason.BRAND_KEYWORD_HOMOGLYPH,),
                severity=severity,
                location=location,
                details=tuple(details),
            )

        if self.mixed_script_check:
            mixed = [token for token in text.split() if self.classifier.is_mixed(token)]
            if mixed:
                return Verdict(
                    suspicious=True,
                    reason=Reason.MIXED_SCRIPT,
                    canonical_form=folded,
                    original_form=text,
                    matched_scripts=frozenset(self.classifier.scripts_of(" ".join(mixed))),
                    matched_terms=tuple(dict.fromkeys(mixed)),
                    reasons=(Reason.MIXED_SCRIPT,),
                    severity=Severity.LOW,
                    location=location,
                    details=(f"Mixed-script words in {location.label}: {', '.join(mixed)}",),
                )

        logger.debug("Terms matched in %s but no lookalike tokens", location.value)
        return Verdict.clean(text, folded, location=location)

    def _contains_term(self, haystack: str) -> bool:
        return any(term in haystack for term in self.terms)

    def _token_terms(self, token: str) -> list[str]:
        """Terms found in a token, directly or after homoglyph folding."""
        lowered = token.lower()
        folded = fold_homoglyphs(token, self.homoglyphs)
        return [term for term in self.terms if term in lowered or term in folded]


def _clean_terms(terms: Iterable[str]) -> list[str]:
    cleaned: list[str] = []
    for term in terms or []:
        value = str(term or "").strip().lower()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned
