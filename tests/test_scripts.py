"""Tests for script classification."""

import pytest

from glyphwatch.analyzer.scripts import (
    CYRILLIC,
    GREEK,
    HEBREW,
    LATIN,
    ConfigError,
    ScriptClassifier,
    ScriptTag,
    build_script_table,
    script_names,
    scripts_of,
)


def test_latin_only():
    assert scripts_of("paypal") == {LATIN}


def test_single_cyrillic_letter_makes_mixed():
    assert scripts_of("pаypal") == {LATIN, CYRILLIC}


def test_empty_and_digits_have_no_script():
    assert scripts_of("") == set()
    assert scripts_of("12345 .-") == set()


def test_other_scripts():
    assert scripts_of("Ελληνικά") == {GREEK}
    assert scripts_of("שלום") == {HEBREW}


def test_latin_supplement_counts_as_latin():
    assert scripts_of("café") == {LATIN}


def test_script_names_sorted():
    assert script_names("αa") == ["Greek", "Latin"]


def test_tags_compare_by_name():
    assert ScriptTag("Latin") == LATIN
    assert hash(ScriptTag("Latin", ((0x41, 0x5A),))) == hash(LATIN)


class TestRangeTable:
    """Configurable range tables."""

    def test_build_from_hex_strings(self):
        table = build_script_table({"Georgian": [["U+10A0", "0x10FF"]]})
        assert table[0].name == "Georgian"
        assert table[0].ranges == ((0x10A0, 0x10FF),)

    def test_single_codepoint_entry(self):
        table = build_script_table({"Dash": [0x2014]})
        assert table[0].ranges == ((0x2014, 0x2014),)

    @pytest.mark.parametrize(
        "ranges",
        [
            [],
            [["zz", "0x10"]],
            [[0x20, 0x10]],
            [[0, 0x110000]],
            [[True, 5]],
        ],
    )
    def test_invalid_ranges_raise(self, ranges):
        with pytest.raises(ConfigError):
            build_script_table({"Bad": ranges})

    def test_custom_table_extends_classifier(self):
        table = build_script_table({"Latin": [[0x41, 0x7A]], "Georgian": [[0x10A0, 0x10FF]]})
        classifier = ScriptClassifier(table)
        assert classifier.script_names("paypal ა") == ["Georgian", "Latin"]
        assert classifier.is_mixed("paypal ა")
        assert not classifier.is_mixed("paypal")

    def test_classifier_ignores_unknown_scripts(self):
        classifier = ScriptClassifier([LATIN])
        assert classifier.scripts_of("рaypal") == {LATIN}
