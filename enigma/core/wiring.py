"""
Wiring Tables
==============

Validation and conversion of rotor and reflector wiring strings into
integer permutation tables.

A wiring string lists, for each contact ``A..Z`` on the entry side, the
letter of the contact it is wired to on the exit side.  A rotor wiring
must be a bijection; a reflector wiring must additionally be an
involution (``w[w[i]] == i``).

References:
    - Rijmenants, D. (2004). Technical Details of the Enigma Machine.
      Cipher Machines & Cryptology.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from enigma.core.alphabet import ALPHABET_SIZE, is_letter, letter_to_index

IntArray = NDArray[np.int64]

ROTOR_WIRINGS: dict[str, str] = {
    "I": "EKMFLGDQVZNTOWYHXUSPAIBRCJ",
    "II": "AJDKSIRUXBLHWTMCQGZNPYFVOE",
    "III": "BDFHJLCPRTXVZNYEIWGAKMUSQO",
}

REFLECTOR_WIRINGS: dict[str, str] = {
    "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
}


class WiringError(ValueError):
    """Raised when a wiring table is not a valid permutation.

    Detected when a machine is built, never while encrypting.
    """


def parse_wiring(wiring: str) -> IntArray:
    """Convert a 26-letter wiring string into an index table.

    Raises:
        WiringError: If the string is not a permutation of the alphabet.
    """
    if len(wiring) != ALPHABET_SIZE:
        raise WiringError(
            f"Wiring must have {ALPHABET_SIZE} letters, got {len(wiring)}: {wiring!r}"
        )
    bad = [ch for ch in wiring if not is_letter(ch)]
    if bad:
        raise WiringError(f"Wiring contains non-letters {bad!r}: {wiring!r}")

    table = np.array([letter_to_index(ch) for ch in wiring], dtype=np.int64)
    if np.unique(table).size != ALPHABET_SIZE:
        counts = np.bincount(table, minlength=ALPHABET_SIZE)
        missing = "".join(chr(ord("A") + i) for i in np.flatnonzero(counts == 0))
        raise WiringError(
            f"Wiring is not a bijection (letters never wired: {missing}): {wiring!r}"
        )
    return table


def invert(table: IntArray) -> IntArray:
    """Return the inverse permutation of *table*."""
    return np.argsort(table).astype(np.int64)
