"""Configuración de pytest y fixtures compartidas."""

import os

import pytest
from hypothesis import Verbosity, settings

from calculator_engine import CalculatorEngine
from locale_tokenizer import LocaleTokenizer
from string_resources import StringResources

# Perfiles de Hypothesis
settings.register_profile("ci", max_examples=300, deadline=None)
settings.register_profile("dev", max_examples=100, deadline=None)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "dev"))


ARABIC_OVERRIDES = {
    "zero_digit": "٠",
    "decimal_point": "٫",
}


@pytest.fixture
def resources():
    return StringResources()


@pytest.fixture
def tokenizer(resources):
    return LocaleTokenizer(resources)


@pytest.fixture
def engine(tokenizer):
    return CalculatorEngine(tokenizer)


@pytest.fixture
def arabic_tokenizer():
    """Tokenizador con dígitos arábigo-índicos y separador decimal local."""
    return LocaleTokenizer(StringResources(ARABIC_OVERRIDES))
