"""
Rotor Bank
===========

Fixed rotor wirings and the two signal paths through a rotated rotor.

A rotor turned by ``offset`` positions presents contact ``x`` of the
machine frame to its own contact ``x + offset``.  The signal therefore
enters at ``(x + offset) mod 26``, is substituted by the wiring, and
leaves at the wired contact shifted back by ``offset``:

    forward(x)  = wiring[(x + offset) mod 26] - offset   (mod 26)
    backward(x) = inverse[(x + offset) mod 26] - offset  (mod 26)

The inverse table is precomputed once per rotor, so both directions are
single lookups and ``backward(forward(x)) == x`` for every offset.
"""

from __future__ import annotations

from typing import Sequence

from enigma.core.alphabet import ALPHABET_SIZE
from enigma.core.wiring import IntArray, invert, parse_wiring


class RotorWiring:
    """An immutable rotor permutation with its precomputed inverse.

    Raises:
        WiringError: If *wiring* is not a permutation of the alphabet.
    """

    __slots__ = ("_wiring", "_forward", "_inverse")

    def __init__(self, wiring: str) -> None:
        table = parse_wiring(wiring)
        self._wiring = wiring.upper()
        self._forward: IntArray = table
        self._inverse: IntArray = invert(table)
        self._forward.flags.writeable = False
        self._inverse.flags.writeable = False

    @property
    def letters(self) -> str:
        """Wiring as a 26-letter string."""
        return self._wiring

    def forward(self, signal: int, offset: int) -> int:
        shifted = (signal + offset) % ALPHABET_SIZE
        return (int(self._forward[shifted]) - offset) % ALPHABET_SIZE

    def backward(self, signal: int, offset: int) -> int:
        shifted = (signal + offset) % ALPHABET_SIZE
        return (int(self._inverse[shifted]) - offset) % ALPHABET_SIZE

    def __repr__(self) -> str:
        return f"<RotorWiring {self._wiring}>"


class RotorBank:
    """The machine's rotors, indexed right to left (0 = fastest).

    The bank holds wiring only; rotor offsets are owned by the stepping
    mechanism and passed in on every call.

    Usage::

        bank = RotorBank(["EKMFLGDQVZNTOWYHXUSPAIBRCJ", ...])
        out = bank.forward(0, rotor_id=0, offset=1)
        assert bank.backward(out, rotor_id=0, offset=1) == 0
    """

    def __init__(self, wirings: Sequence[str]) -> None:
        self._rotors: tuple[RotorWiring, ...] = tuple(RotorWiring(w) for w in wirings)

    def __len__(self) -> int:
        return len(self._rotors)

    def __getitem__(self, rotor_id: int) -> RotorWiring:
        return self._rotors[rotor_id]

    def forward(self, signal: int, rotor_id: int, offset: int) -> int:
        """Pass *signal* right-to-left through rotor *rotor_id*."""
        return self._rotors[rotor_id].forward(signal, offset)

    def backward(self, signal: int, rotor_id: int, offset: int) -> int:
        """Pass *signal* left-to-right through rotor *rotor_id*."""
        return self._rotors[rotor_id].backward(signal, offset)

    def __repr__(self) -> str:
        return f"<RotorBank rotors={len(self._rotors)}>"
