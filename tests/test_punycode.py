"""Tests for the punycode codec."""

import codecs

import idna
import pytest

from glyphwatch.analyzer.punycode import (
    PunycodeError,
    adapt,
    decode_hostname,
    decode_label,
    encode_hostname,
    encode_label,
    punycode_decode,
    punycode_encode,
)

# RFC 3492 section 7.1 samples and common IDNs
UNICODE_SAMPLES = [
    "аpple",
    "bücher",
    "münchen",
    "他们为什么不说中文",
    "почемужеонинеговорятпорусски",
    "ひとつ屋根の下2",
]


class TestAdapt:
    """Bias adaptation arithmetic."""

    def test_first_time_uses_damp(self):
        assert adapt(4720, 5, True) == 5

    def test_zero_delta(self):
        assert adapt(0, 1, True) == 0
        assert adapt(0, 1, False) == 0

    def test_large_delta_steps_k(self):
        assert adapt(100000, 1, False) == 96


class TestDecodeLabel:
    """Label decoding."""

    def test_canonical_example(self):
        assert decode_label("xn--pple-43d") == "аpple"

    @pytest.mark.parametrize(
        "label",
        ["example", "", "xn-", "x--abc", "abc-def", "пример", "xnx--pple-43d"],
    )
    def test_identity_without_ace_prefix(self, label):
        assert decode_label(label) == label

    def test_prefix_is_case_insensitive(self):
        assert decode_label("XN--pple-43d") == "аpple"

    @pytest.mark.parametrize(
        "label",
        [
            "xn--",  # empty payload
            "xn--pple-43!",  # invalid digit
            "xn--9",  # truncated digit sequence
            "xn--" + "9" * 20 + "a",  # overflow
            "xn--ü-abc",  # non-ASCII basic code points
            "xn--\x00",
        ],
    )
    def test_malformed_falls_back_to_input(self, label):
        assert decode_label(label) == label

    def test_malformed_raises_internally(self):
        with pytest.raises(PunycodeError):
            punycode_decode("9")

    @pytest.mark.parametrize("sample", UNICODE_SAMPLES)
    def test_matches_stdlib_codec(self, sample):
        encoded = codecs.encode(sample, "punycode").decode("ascii")
        assert punycode_decode(encoded) == sample

    def test_decoding_is_idempotent(self):
        decoded = decode_label("xn--pple-43d")
        assert decode_label(decoded) == decoded


class TestDecodeHostname:
    """Hostname decoding."""

    def test_decodes_each_label(self):
        assert decode_hostname("xn--pple-43d.com") == "аpple.com"
        assert decode_hostname("www.xn--bcher-kva.example") == "www.bücher.example"

    def test_plain_hostname_unchanged(self):
        assert decode_hostname("mail.example.com") == "mail.example.com"

    def test_empty(self):
        assert decode_hostname("") == ""

    @pytest.mark.parametrize(
        "hostname",
        ["a.b.c", "xn--pple-43d.com", "xn--9.xn--80ak6aa92e.com", "single", "xn--.x"],
    )
    def test_preserves_label_count(self, hostname):
        assert len(decode_hostname(hostname).split(".")) == len(hostname.split("."))

    def test_keeps_malformed_label_in_place(self):
        assert decode_hostname("xn--9.xn--pple-43d.com") == "xn--9.аpple.com"

    def test_idempotent(self):
        once = decode_hostname("xn--80ak6aa92e.com")
        assert decode_hostname(once) == once

    def test_long_and_odd_input_never_raises(self):
        hostname = ".".join(["xn--" + "a" * 70] * 50) + "\x00"
        assert isinstance(decode_hostname(hostname), str)


class TestEncode:
    """Encoder and round trip."""

    @pytest.mark.parametrize("sample", UNICODE_SAMPLES)
    def test_matches_stdlib_codec(self, sample):
        assert punycode_encode(sample) == codecs.encode(sample, "punycode").decode("ascii")

    def test_matches_idna_for_hostnames(self):
        for host in ("аpple.com", "bücher.example", "münchen.de"):
            assert encode_hostname(host) == idna.encode(host).decode("ascii")

    def test_ascii_label_unchanged(self):
        assert encode_label("example") == "example"

    @pytest.mark.parametrize("label", ["xn--pple-43d", "xn--bcher-kva", "xn--80ak6aa92e", "xn--mnchen-3ya"])
    def test_round_trip(self, label):
        assert encode_label(decode_label(label)) == label
