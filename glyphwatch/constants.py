"""Centralized constants for glyphwatch.

This module contains enums shared by the verdict engines, the session
facade and the configuration layer.
"""

from enum import Enum, IntEnum


class Severity(IntEnum):
    """Verdict severity levels with ranking for comparison."""

    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    def __str__(self) -> str:
        return self.name.lower()


class Reason(str, Enum):
    """Why a verdict was marked suspicious."""

    NON_LATIN_CHARS = "non_latin_chars"  # Decoded host has characters outside [A-Za-z0-9.-]
    MIXED_SCRIPT = "mixed_script"  # More than one script co-occurs
    BRAND_KEYWORD_HOMOGLYPH = "brand_keyword_homoglyph"  # Keyword/brand spelled with lookalikes

    def __str__(self) -> str:
        return self.value


class LocationTag(str, Enum):
    """Where a text fragment was found."""

    EMAIL_SUBJECT = "email_subject"
    SENDER_NAME = "sender_name"
    EMAIL_BODY = "email_body"
    LINK_TEXT = "link_text"
    PAGE_TEXT = "page_text"

    @classmethod
    def coerce(cls, value: "LocationTag | str") -> "LocationTag":
        """Accept an enum member or its string value."""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    def __str__(self) -> str:
        return self.value


# Reason ranking used to pick the primary reason when several fire
REASON_PRIORITY = {
    Reason.BRAND_KEYWORD_HOMOGLYPH: 3,
    Reason.MIXED_SCRIPT: 2,
    Reason.NON_LATIN_CHARS: 1,
}


def primary_reason(reasons: list[Reason]) -> Reason | None:
    """Return the highest-ranked reason, or None when nothing fired."""
    if not reasons:
        return None
    return max(reasons, key=lambda r: REASON_PRIORITY.get(r, 0))
