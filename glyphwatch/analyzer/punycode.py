"""Punycode (RFC 3492) codec for IDN hostname labels.

Decoding never raises: a label that cannot be decoded is returned as-is,
so callers always get a displayable string back.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

ACE_PREFIX = "xn--"

BASE = 36
TMIN = 1
TMAX = 26
SKEW = 38
DAMP = 700
INITIAL_BIAS = 72
INITIAL_N = 0x80
DELIMITER = "-"

MAXINT = 0x7FFFFFFF
MAX_CODEPOINT = 0x10FFFF


class PunycodeError(ValueError):
    """Raised when an encoded label is malformed."""


def adapt(delta: int, num_points: int, first_time: bool) -> int:
    """Bias adaptation function (RFC 3492 section 6.1)."""
    delta = delta // DAMP if first_time else delta // 2
    delta += delta // num_points
    k = 0
    while delta > ((BASE - TMIN) * TMAX) // 2:
        delta //= BASE - TMIN
        k += BASE
    return k + ((BASE - TMIN + 1) * delta) // (delta + SKEW)


def _threshold(k: int, bias: int) -> int:
    if k <= bias:
        return TMIN
    if k >= bias + TMAX:
        return TMAX
    return k - bias


def _digit_value(char: str) -> int:
    code = ord(char)
    if 0x30 <= code <= 0x39:  # 0-9
        return code - 22
    if 0x41 <= code <= 0x5A:  # A-Z
        return code - 0x41
    if 0x61 <= code <= 0x7A:  # a-z
        return code - 0x61
    raise PunycodeError(f"Invalid punycode digit: {char!r}")


def _digit_char(digit: int) -> str:
    # 0..25 -> a..z, 26..35 -> 0..9
    if digit < 26:
        return chr(digit + 0x61)
    return chr(digit + 22)


def punycode_decode(encoded: str) -> str:
    """Decode a punycode string (without the ACE prefix)."""
    if not encoded:
        raise PunycodeError("Empty punycode payload")

    pos = encoded.rfind(DELIMITER)
    if pos >= 0:
        basic, extended = encoded[:pos], encoded[pos + 1:]
    else:
        basic, extended = "", encoded

    if not basic.isascii():
        raise PunycodeError("Non-ASCII basic code points")

    output = list(basic)
    n, i, bias = INITIAL_N, 0, INITIAL_BIAS
    index = 0

    while index < len(extended):
        old_i, w = i, 1
        k = BASE
        while True:
            if index >= len(extended):
                raise PunycodeError("Truncated punycode digit sequence")
            digit = _digit_value(extended[index])
            index += 1
            i += digit * w
            if i > MAXINT:
                raise PunycodeError("Punycode overflow")
            t = _threshold(k, bias)
            if digit < t:
                break
            w *= BASE - t
            if w > MAXINT:
                raise PunycodeError("Punycode overflow")
            k += BASE

        length = len(output) + 1
        bias = adapt(i - old_i, length, old_i == 0)
        n += i // length
        i %= length
        if n > MAX_CODEPOINT or 0xD800 <= n <= 0xDFFF:
            raise PunycodeError(f"Decoded code point out of range: {n:#x}")
        output.insert(i, chr(n))
        i += 1

    return "".join(output)


def punycode_encode(text: str) -> str:
    """Encode a Unicode string as punycode (without the ACE prefix)."""
    codepoints = [ord(char) for char in text]
    output = [char for char in text if ord(char) < INITIAL_N]
    basic_count = handled = len(output)
    if basic_count:
        output.append(DELIMITER)

    n, delta, bias = INITIAL_N, 0, INITIAL_BIAS
    while handled < len(codepoints):
        m = min(cp for cp in codepoints if cp >= n)
        delta += (m - n) * (handled + 1)
        if delta > MAXINT:
            raise PunycodeError("Punycode overflow")
        n = m
        for cp in codepoints:
            if cp < n:
                delta += 1
            elif cp == n:
                q = delta
                k = BASE
                while True:
                    t = _threshold(k, bias)
                    if q < t:
                        break
                    output.append(_digit_char(t + (q - t) % (BASE - t)))
                    q = (q - t) // (BASE - t)
                    k += BASE
                output.append(_digit_char(q))
                bias = adapt(delta, handled + 1, handled == basic_count)
                delta = 0
                handled += 1
        delta += 1
        n += 1

    return "".join(output)


def is_ace_label(label: str) -> bool:
    return len(label) >= len(ACE_PREFIX) and label[: len(ACE_PREFIX)].lower() == ACE_PREFIX


def decode_label(label: str) -> str:
    """Decode one ``xn--`` label; anything else (or anything malformed) is returned unchanged."""
    if not label or not is_ace_label(label):
        return label
    try:
        return punycode_decode(label[len(ACE_PREFIX):])
    except PunycodeError as exc:
        logger.debug("Keeping undecodable label %r: %s", label, exc)
        return label


def decode_hostname(hostname: str) -> str:
    """Decode every ACE label of a hostname, preserving label order and count."""
    if not hostname:
        return hostname or ""
    return ".".join(decode_label(label) for label in hostname.split("."))


def encode_label(label: str) -> str:
    """Encode a Unicode label to its ``xn--`` form; ASCII labels pass through."""
    if not label or label.isascii():
        return label
    try:
        return ACE_PREFIX + punycode_encode(label)
    except PunycodeError as exc:
        logger.debug("Keeping unencodable label %r: %s", label, exc)
        return label


def encode_hostname(hostname: str) -> str:
    if not hostname:
        return hostname or ""
    return ".".join(encode_label(label) for label in hostname.split("."))
