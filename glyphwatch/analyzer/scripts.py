"""Unicode script classification.

Each script is a named record with one or more inclusive code-point
intervals. The table is plain data so new scripts can be added from
configuration without touching the engines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping


class ConfigError(ValueError):
    """Raised when a script range table entry cannot be parsed."""


@dataclass(frozen=True)
class ScriptTag:
    """A writing system identified by its code-point ranges."""

    name: str
    ranges: tuple[tuple[int, int], ...] = field(default=(), compare=False)

    def contains(self, codepoint: int) -> bool:
        for low, high in self.ranges:
            if low <= codepoint <= high:
                return True
        return False

    def __str__(self) -> str:
        return self.name


LATIN = ScriptTag("Latin", ((0x0041, 0x007A), (0x00C0, 0x00FF)))
GREEK = ScriptTag("Greek", ((0x0370, 0x03FF),))
CYRILLIC = ScriptTag("Cyrillic", ((0x0400, 0x04FF),))
ARMENIAN = ScriptTag("Armenian", ((0x0530, 0x058F),))
HEBREW = ScriptTag("Hebrew", ((0x0590, 0x05FF),))
ARABIC = ScriptTag("Arabic", ((0x0600, 0x06FF),))

DEFAULT_SCRIPTS: tuple[ScriptTag, ...] = (LATIN, GREEK, CYRILLIC, ARMENIAN, HEBREW, ARABIC)


def _parse_codepoint(value) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"Invalid code point: {value!r}")
    if isinstance(value, int):
        codepoint = value
    else:
        # Strings are always hex: "0x0400", "U+0400" or "0400"
        text = str(value).strip().upper()
        if text.startswith("U+"):
            text = text[2:]
        try:
            codepoint = int(text, 16)
        except ValueError as exc:
            raise ConfigError(f"Invalid code point: {value!r}") from exc
    if not 0 <= codepoint <= 0x10FFFF:
        raise ConfigError(f"Code point out of range: {value!r}")
    return codepoint


def build_script_tag(name: str, ranges: Iterable) -> ScriptTag:
    """Build a tag from ``[[low, high], ...]`` (ints, hex strings or U+XXXX)."""
    name = str(name or "").strip()
    if not name:
        raise ConfigError("Script name must not be empty")

    parsed: list[tuple[int, int]] = []
    for entry in ranges or []:
        if isinstance(entry, (list, tuple)) and len(entry) == 2:
            low, high = _parse_codepoint(entry[0]), _parse_codepoint(entry[1])
        elif isinstance(entry, (list, tuple)) and len(entry) == 1:
            low = high = _parse_codepoint(entry[0])
        else:
            low = high = _parse_codepoint(entry)
        if low > high:
            raise ConfigError(f"Empty range for {name}: {entry!r}")
        parsed.append((low, high))

    if not parsed:
        raise ConfigError(f"Script {name} has no ranges")
    return ScriptTag(name, tuple(parsed))


def build_script_table(mapping: Mapping[str, Iterable]) -> tuple[ScriptTag, ...]:
    """Turn a ``{name: ranges}`` mapping into an ordered tuple of tags."""
    return tuple(build_script_tag(name, ranges) for name, ranges in mapping.items())


class ScriptClassifier:
    """Maps characters to the scripts of a range table."""

    def __init__(self, table: Iterable[ScriptTag] | None = None):
        self.table: tuple[ScriptTag, ...] = tuple(table) if table is not None else DEFAULT_SCRIPTS

    def scripts_of(self, text: str) -> set[ScriptTag]:
        """Return every script with at least one character in ``text``."""
        found: set[ScriptTag] = set()
        if not text:
            return found
        remaining = list(self.table)
        for char in text:
            codepoint = ord(char)
            for tag in list(remaining):
                if tag.contains(codepoint):
                    found.add(tag)
                    remaining.remove(tag)
            if not remaining:
                break
        return found

    def script_names(self, text: str) -> list[str]:
        return sorted(tag.name for tag in self.scripts_of(text))

    def is_mixed(self, text: str) -> bool:
        return len(self.scripts_of(text)) > 1


_default_classifier = ScriptClassifier()


def scripts_of(text: str) -> set[ScriptTag]:
    """Classify ``text`` against the built-in script table."""
    return _default_classifier.scripts_of(text)


def script_names(text: str) -> list[str]:
    return _default_classifier.script_names(text)
