"""Global pytest configuration."""

from __future__ import annotations

import os

import pytest

from glyphwatch.analyzer import DomainVerdictEngine, ScriptClassifier, TextVerdictEngine
from glyphwatch.config import Config
from glyphwatch.session import ScanSession

# Keep a developer's .env from changing engine behaviour under test.
os.environ.setdefault("MIXED_SCRIPT_CHECK", "true")
os.environ.setdefault("TEXT_MIXED_SCRIPT_CHECK", "false")


@pytest.fixture
def config(tmp_path) -> Config:
    """Default configuration rooted in an empty config dir."""
    return Config(config_dir=tmp_path)


@pytest.fixture
def classifier(config) -> ScriptClassifier:
    return ScriptClassifier(config.script_table())


@pytest.fixture
def domain_engine(config, classifier) -> DomainVerdictEngine:
    return DomainVerdictEngine(
        classifier,
        private_prefixes=config.private_prefixes,
        brands=config.brands,
        homoglyphs=config.homoglyphs,
    )


@pytest.fixture
def text_engine(config, classifier) -> TextVerdictEngine:
    return TextVerdictEngine(
        config.keywords,
        config.brands,
        classifier=classifier,
        homoglyphs=config.homoglyphs,
    )


@pytest.fixture
def session(config):
    """A started scan session, closed after the test."""
    with ScanSession(config) as active:
        yield active
