"""Tests for text verdicts."""

from glyphwatch.analyzer.text import TextVerdictEngine
from glyphwatch.constants import LocationTag, Reason, Severity


class TestBrandKeywordHomoglyph:
    """Keyword/brand tokens spelled with lookalike characters."""

    def test_cyrillic_brand_in_subject(self, text_engine):
        verdict = text_engine.evaluate_text(
            "Please verify your РayPal account", LocationTag.EMAIL_SUBJECT
        )
        assert verdict.suspicious is True
        assert verdict.reason == Reason.BRAND_KEYWORD_HOMOGLYPH
        assert "РayPal" in verdict.matched_terms
        assert verdict.location == LocationTag.EMAIL_SUBJECT
        assert verdict.severity == Severity.HIGH
        assert verdict.canonical_form == "please verify your paypal account"

    def test_clean_ascii_brand_does_not_trigger(self, text_engine):
        verdict = text_engine.evaluate_text(
            "Please verify your PayPal account", LocationTag.EMAIL_SUBJECT
        )
        assert verdict.suspicious is False
        assert verdict.matched_terms == ()

    def test_keyword_only_is_medium(self, text_engine):
        verdict = text_engine.evaluate_text("Urgent: vеrify your login", LocationTag.EMAIL_BODY)
        assert verdict.suspicious is True
        assert verdict.matched_terms == ("vеrify",)
        assert verdict.severity == Severity.MEDIUM

    def test_matched_terms_are_deduplicated_in_order(self, text_engine):
        verdict = text_engine.evaluate_text(
            "РayPal notice: РayPal account аlert", LocationTag.EMAIL_BODY
        )
        assert verdict.matched_terms == ("РayPal", "аlert")

    def test_punctuation_is_not_non_latin(self, text_engine):
        verdict = text_engine.evaluate_text('"Verify!" (PayPal), [account]', LocationTag.EMAIL_BODY)
        assert verdict.suspicious is False

    def test_sender_name_location_string(self, text_engine):
        verdict = text_engine.evaluate_text("Аpple Support", "sender_name")
        assert verdict.suspicious is True
        assert verdict.location == LocationTag.SENDER_NAME
        assert verdict.alert_key == "sender_name:аpple"


class TestShortCircuit:
    """Text without any configured term."""

    def test_foreign_prose_is_clean(self, text_engine):
        verdict = text_engine.evaluate_text("Привет, как дела?", LocationTag.EMAIL_BODY)
        assert verdict.suspicious is False

    def test_empty_text(self, text_engine):
        verdict = text_engine.evaluate_text("", LocationTag.EMAIL_SUBJECT)
        assert verdict.suspicious is False
        assert verdict.canonical_form == ""

    def test_non_latin_without_terms_is_clean(self, text_engine):
        assert text_engine.evaluate_text("Café meeting at 5", LocationTag.EMAIL_SUBJECT).suspicious is False


class TestMixedScriptTokens:
    """Optional per-token mixed-script check."""

    def test_disabled_by_default(self, text_engine):
        verdict = text_engine.evaluate_text("Your account: Неllo", LocationTag.EMAIL_BODY)
        assert verdict.suspicious is False

    def test_enabled_flags_mixed_token(self):
        engine = TextVerdictEngine(["account"], [], mixed_script_check=True)
        verdict = engine.evaluate_text("Your account: Неllo", LocationTag.EMAIL_BODY)
        assert verdict.suspicious is True
        assert verdict.reason == Reason.MIXED_SCRIPT
        assert verdict.matched_terms == ("Неllo",)
        assert verdict.severity == Severity.LOW

    def test_enabled_still_short_circuits(self):
        engine = TextVerdictEngine(["account"], [], mixed_script_check=True)
        assert engine.evaluate_text("Неllo world", LocationTag.EMAIL_BODY).suspicious is False


def test_custom_terms():
    engine = TextVerdictEngine(["Invoice "], ["ACME"])
    assert engine.terms == ["invoice", "acme"]
    verdict = engine.evaluate_text("АCME invoice", LocationTag.EMAIL_SUBJECT)
    assert verdict.matched_terms == ("АCME",)
    assert verdict.severity == Severity.HIGH


def test_unknown_location_falls_back_to_page_text(text_engine):
    verdict = text_engine.evaluate_text("Verify your Аpple ID", "fax_header")
    assert verdict.suspicious is True
    assert verdict.location == LocationTag.PAGE_TEXT
    assert verdict.alert_key == "page_text:аpple"


def test_odd_input_never_raises(text_engine):
    verdict = text_engine.evaluate_text("\x00 verify " + "ра" * 5000, LocationTag.EMAIL_BODY)
    assert isinstance(verdict.suspicious, bool)
