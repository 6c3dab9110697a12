"""
Plugboard
==========

Letter-pair transposition applied before the signal enters the rotors
and again after it leaves them.

Configuration text is read at a fixed three-character stride: each
chunk is ``<letter><space><letter>`` and whatever follows the second
letter belongs to the next chunk.  ``"A BC DE F"`` therefore plugs A-B,
C-D and E-F, while in ``"A B C D"`` only A-B is well formed (the chunks
``" C "`` and ``"D"`` are skipped).  Malformed chunks never abort the
configuration; they are returned in the :class:`PlugboardReport`.

A pair reusing an already plugged letter is skipped rather than
overwriting the earlier cable, so every swap stays two-way.
"""

from __future__ import annotations

import numpy as np

from enigma.core.alphabet import ALPHABET_SIZE, index_to_letter, is_letter, letter_to_index
from enigma.core.models import PlugboardPair, PlugboardReport, SkippedPair
from enigma.core.wiring import IntArray

PAIR_STRIDE: int = 3


class Plugboard:
    """Symmetric swap table stored as signed offsets.

    ``mapping[i]`` is the distance from letter ``i`` to its partner, so
    ``apply(i) == i + mapping[i]`` and an unplugged letter has offset 0.
    """

    def __init__(self) -> None:
        self._mapping: IntArray = np.zeros(ALPHABET_SIZE, dtype=np.int64)

    # ------------------------------------------------------------------ #
    #  Configuration
    # ------------------------------------------------------------------ #

    def configure(self, spec: str) -> PlugboardReport:
        """Replace every connection with the pairs parsed from *spec*.

        Args:
            spec: Pair specification, e.g. ``"A BC D"``.

        Returns:
            A :class:`PlugboardReport` listing accepted and skipped pairs.
        """
        self._mapping[:] = 0
        pairs: list[PlugboardPair] = []
        skipped: list[SkippedPair] = []

        for pos in range(0, len(spec), PAIR_STRIDE):
            chunk = spec[pos:pos + PAIR_STRIDE]
            if not chunk.strip():
                continue

            reason = self._reject_reason(spec, pos)
            if reason is None:
                first = letter_to_index(spec[pos])
                second = letter_to_index(spec[pos + 2])
                if first == second:
                    reason = "letter paired with itself"
                elif self._mapping[first] or self._mapping[second]:
                    reason = "letter already plugged"
                else:
                    self._mapping[first] = second - first
                    self._mapping[second] = first - second
                    pairs.append(PlugboardPair(
                        first=index_to_letter(first),
                        second=index_to_letter(second),
                    ))
                    continue

            skipped.append(SkippedPair(position=pos, text=chunk, reason=reason))

        return PlugboardReport(spec=spec, pairs=pairs, skipped=skipped)

    @staticmethod
    def _reject_reason(spec: str, pos: int) -> str | None:
        if pos + 1 >= len(spec) or spec[pos + 1] != " ":
            return "missing separator"
        if pos + 2 >= len(spec):
            return "incomplete pair"
        if not (is_letter(spec[pos]) and is_letter(spec[pos + 2])):
            return "letter out of range"
        return None

    # ------------------------------------------------------------------ #
    #  Signal path
    # ------------------------------------------------------------------ #

    def apply(self, signal: int) -> int:
        return signal + int(self._mapping[signal])

    @property
    def pairs(self) -> list[PlugboardPair]:
        """Current connections, each listed once with the lower letter first."""
        return [
            PlugboardPair(first=index_to_letter(i), second=index_to_letter(i + int(off)))
            for i, off in enumerate(self._mapping)
            if off > 0
        ]

    def __repr__(self) -> str:
        plugged = " ".join(f"{p.first}{p.second}" for p in self.pairs)
        return f"<Plugboard {plugged or 'empty'}>"
