"""
Alphabet Codec
===============

Bidirectional mapping between the 26 Latin letters and the integer
signal indices 0-25 used on every wire of the machine.
"""

from __future__ import annotations

import string

ALPHABET: str = string.ascii_uppercase
ALPHABET_SIZE: int = len(ALPHABET)


def is_letter(char: str) -> bool:
    """Return ``True`` for a single ASCII letter (either case)."""
    return len(char) == 1 and char.isascii() and char.isalpha()


def letter_to_index(char: str) -> int:
    """Convert a letter to its signal index, ignoring case.

    Raises:
        ValueError: If *char* is not a single ASCII letter.
    """
    if not is_letter(char):
        raise ValueError(f"Not a machine letter: {char!r}")
    return ord(char.upper()) - ord("A")


def index_to_letter(index: int) -> str:
    """Convert a signal index (taken modulo 26) to an uppercase letter."""
    return ALPHABET[index % ALPHABET_SIZE]
