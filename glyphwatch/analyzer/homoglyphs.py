"""Homoglyph folding: map lookalike characters back to Latin."""

from __future__ import annotations

import unicodedata
from typing import Mapping

# Characters that look like Latin letters, keyed by lowercase form
DEFAULT_HOMOGLYPHS: dict[str, str] = {
    "а": "a",  # Cyrillic а
    "в": "b",  # Cyrillic в (small caps form)
    "е": "e",  # Cyrillic е
    "һ": "h",  # Cyrillic һ
    "к": "k",  # Cyrillic к
    "м": "m",  # Cyrillic м
    "н": "h",  # Cyrillic н (small caps form)
    "о": "o",  # Cyrillic о
    "р": "p",  # Cyrillic р
    "с": "c",  # Cyrillic с
    "т": "t",  # Cyrillic т
    "у": "y",  # Cyrillic у
    "х": "x",  # Cyrillic х
    "ѕ": "s",  # Cyrillic ѕ
    "і": "i",  # Cyrillic і
    "ј": "j",  # Cyrillic ј
    "ԁ": "d",  # Cyrillic ԁ
    "ԛ": "q",  # Cyrillic ԛ
    "ԝ": "w",  # Cyrillic ԝ
    "ӏ": "l",  # Cyrillic palochka
    "ɡ": "g",  # Latin script g
    "ı": "i",  # Latin dotless i
    "α": "a",  # Greek alpha
    "β": "b",  # Greek beta
    "ε": "e",  # Greek epsilon
    "ι": "i",  # Greek iota
    "κ": "k",  # Greek kappa
    "ν": "v",  # Greek nu
    "ο": "o",  # Greek omicron
    "ρ": "p",  # Greek rho
    "τ": "t",  # Greek tau
    "υ": "u",  # Greek upsilon
    "χ": "x",  # Greek chi
    "ո": "n",  # Armenian ո
    "ս": "u",  # Armenian ս
    "օ": "o",  # Armenian օ
    "ց": "g",  # Armenian ց
}


def fold_homoglyphs(text: str, table: Mapping[str, str] | None = None) -> str:
    """Lowercase ``text`` and replace homoglyphs with their Latin equivalents."""
    if not text:
        return ""
    table = DEFAULT_HOMOGLYPHS if table is None else table
    result = []
    for char in text.lower():
        if char in table:
            result.append(table[char])
        else:
            # NFKC catches fullwidth and other compatibility lookalikes
            result.append(unicodedata.normalize("NFKC", char).lower())
    return "".join(result)
