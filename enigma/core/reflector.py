"""
Reflector
==========

The non-rotating turnaround wheel.  Its wiring pairs every contact with
exactly one partner, which is what makes the whole machine reciprocal.
"""

from __future__ import annotations

import numpy as np

from enigma.core.alphabet import ALPHABET_SIZE
from enigma.core.wiring import IntArray, WiringError, parse_wiring


class Reflector:
    """Fixed involutive wiring applied between the two rotor passes.

    Fixed points (a contact wired to itself) are accepted; the historical
    reflectors have none, see :attr:`has_fixed_points`.

    Raises:
        WiringError: If *wiring* is not an involution over the alphabet.
    """

    def __init__(self, wiring: str) -> None:
        table = parse_wiring(wiring)
        indices = np.arange(ALPHABET_SIZE)
        unpaired = indices[table[table] != indices]
        if unpaired.size:
            letters = "".join(chr(ord("A") + int(i)) for i in unpaired)
            raise WiringError(
                f"Reflector wiring is not an involution (unpaired: {letters}): {wiring!r}"
            )
        self._wiring = wiring.upper()
        self._table: IntArray = table
        self._table.flags.writeable = False

    @property
    def letters(self) -> str:
        return self._wiring

    @property
    def has_fixed_points(self) -> bool:
        return bool(np.any(self._table == np.arange(ALPHABET_SIZE)))

    def reflect(self, signal: int) -> int:
        return int(self._table[signal])

    def __repr__(self) -> str:
        return f"<Reflector {self._wiring}>"
