"""Detection engine modules for glyphwatch."""

from .aggregator import AlertAggregator
from .domain import DomainVerdictEngine
from .links import LinkVerdictEngine
from .metrics import ScanMetrics
from .models import ScanResult, Verdict
from .punycode import decode_hostname, decode_label, encode_hostname, encode_label
from .scripts import ScriptClassifier, ScriptTag, scripts_of
from .text import TextVerdictEngine

__all__ = [
    "AlertAggregator",
    "DomainVerdictEngine",
    "LinkVerdictEngine",
    "ScanMetrics",
    "ScanResult",
    "Verdict",
    "decode_hostname",
    "decode_label",
    "encode_hostname",
    "encode_label",
    "ScriptClassifier",
    "ScriptTag",
    "scripts_of",
    "TextVerdictEngine",
]
