"""
Tests for the alphabet codec.

Run with: pytest tests/test_alphabet.py -v
"""

import pytest

from enigma.core.alphabet import ALPHABET_SIZE, index_to_letter, is_letter, letter_to_index


class TestLetterToIndex:
    """Letter -> signal index."""

    def test_uppercase(self):
        assert letter_to_index("A") == 0
        assert letter_to_index("Z") == 25

    def test_case_insensitive(self):
        """Lowercase letters map to the same index as uppercase."""
        assert letter_to_index("m") == letter_to_index("M") == 12

    @pytest.mark.parametrize("char", ["1", " ", "", "AB", "é", "["])
    def test_rejects_non_letters(self, char):
        with pytest.raises(ValueError):
            letter_to_index(char)


class TestIndexToLetter:
    """Signal index -> letter."""

    def test_basic(self):
        assert index_to_letter(0) == "A"
        assert index_to_letter(25) == "Z"

    def test_wraps_modulo_alphabet(self):
        """Indices outside 0-25 are reduced modulo 26."""
        assert index_to_letter(ALPHABET_SIZE) == "A"
        assert index_to_letter(-1) == "Z"

    def test_every_letter_round_trips(self):
        for i in range(ALPHABET_SIZE):
            assert letter_to_index(index_to_letter(i)) == i


class TestIsLetter:
    """The alphabetic guard used by the engine."""

    def test_ascii_letters(self):
        assert is_letter("q")
        assert is_letter("Q")

    def test_non_ascii_letters_are_not_machine_letters(self):
        assert not is_letter("ß")
        assert not is_letter("Ä")

    def test_punctuation_and_digits(self):
        assert not is_letter(",")
        assert not is_letter("7")
