"""Shared fixtures for the Enigma test suite."""

import pytest

from enigma.core.engine import EnigmaMachine


@pytest.fixture
def machine() -> EnigmaMachine:
    """A default machine (rotors I-II-III, reflector B, AAA, no plugs)."""
    return EnigmaMachine(console_output=False)
