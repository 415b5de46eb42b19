"""Hostname helpers shared by the verdict engines."""

from __future__ import annotations

from urllib.parse import urljoin, urlparse

import tldextract

LOCALHOST = "localhost"

# Bundled public suffix snapshot only; glyphwatch never touches the network
_extractor = tldextract.TLDExtract(suffix_list_urls=())


def ensure_url(value: str) -> str:
    raw = (value or "").strip()
    if not raw:
        return ""
    return raw if "://" in raw else f"https://{raw}"


def resolve_url(href: str, base_url: str | None = None) -> str:
    """Resolve a (possibly relative) href against the page URL."""
    raw = (href or "").strip()
    if not raw:
        return ""
    if base_url:
        return urljoin(base_url, raw)
    return raw


def extract_hostname(value: str, base_url: str | None = None) -> str:
    """
    Return the hostname of a URL or bare host.

    - Lowercase
    - Strip port, credentials and trailing dot
    - Ignore path/query/fragment
    """
    resolved = resolve_url(value, base_url)
    if not resolved:
        return ""
    if not resolved.startswith("//"):
        resolved = ensure_url(resolved)
    try:
        parsed = urlparse(resolved)
        host = parsed.hostname or ""
    except ValueError:
        return ""
    host = host.strip().rstrip(".")
    if any(ch.isspace() or ord(ch) < 0x20 for ch in host):
        return ""
    return host


def is_private_host(host: str, prefixes: tuple[str, ...] | list[str]) -> bool:
    """Whether ``host`` is empty, localhost or on a private network prefix."""
    value = (host or "").strip().lower().rstrip(".")
    if not value or value == LOCALHOST:
        return True
    return any(value.startswith(prefix) for prefix in prefixes)


def registered_label(host: str) -> str:
    """Return the registrable label of a host (``paypal`` for ``www.paypal.co.uk``)."""
    raw = (host or "").strip().lower().strip(".")
    if not raw:
        return ""
    extracted = _extractor(raw)
    if extracted.domain and extracted.suffix:
        return extracted.domain
    labels = raw.split(".")
    # Unknown suffix: treat the last label as the TLD
    if len(labels) > 1 and not labels[-1].isdigit():
        return labels[-2]
    return extracted.domain or labels[0]
