"""
Stepping Mechanism
===================

Advances the rotor offsets once per enciphered letter.

The rightmost rotor moves one position on every keypress.  Each time it
completes a full revolution (every 26th step since the counter was last
reset) the middle rotor advances by two positions.  The left rotor only
moves when positions are set explicitly.

This periodic rule is the machine's defined behaviour; it is not the
notch-driven stepping of the historical Wehrmacht machines, and changing
it would change every ciphertext.
"""

from __future__ import annotations

from enigma.core.alphabet import ALPHABET_SIZE
from enigma.core.models import MachineState

ROTOR_COUNT: int = 3
RIGHT, MIDDLE, LEFT = 0, 1, 2
DOUBLE_STEP: int = 2


class SteppingMechanism:
    """Rotor offsets plus the right-rotor revolution counter.

    Offsets are indexed right to left: ``offsets[0]`` is the fastest
    rotor.  The counter survives :meth:`set_positions`; only
    :meth:`reset` and :meth:`restore` change it.
    """

    def __init__(self) -> None:
        self._offsets: list[int] = [0] * ROTOR_COUNT
        self._right_step_count: int = 0

    @property
    def offsets(self) -> tuple[int, ...]:
        return tuple(self._offsets)

    @property
    def right_step_count(self) -> int:
        return self._right_step_count

    def step(self) -> bool:
        """Advance for one keypress.

        Returns:
            ``True`` when the middle rotor double-stepped on this keypress.
        """
        self._offsets[RIGHT] = (self._offsets[RIGHT] + 1) % ALPHABET_SIZE
        self._right_step_count += 1
        if self._right_step_count % ALPHABET_SIZE == 0:
            self._offsets[MIDDLE] = (self._offsets[MIDDLE] + DOUBLE_STEP) % ALPHABET_SIZE
            return True
        return False

    def set_positions(self, left: int, middle: int, right: int) -> None:
        """Turn the rotors by hand; the step counter is left untouched."""
        self._offsets[LEFT] = left % ALPHABET_SIZE
        self._offsets[MIDDLE] = middle % ALPHABET_SIZE
        self._offsets[RIGHT] = right % ALPHABET_SIZE

    def reset(self) -> None:
        """Zero every offset and the step counter."""
        self._offsets = [0] * ROTOR_COUNT
        self._right_step_count = 0

    def snapshot(self) -> MachineState:
        return MachineState(
            offsets=tuple(self._offsets),
            right_step_count=self._right_step_count,
        )

    def restore(self, state: MachineState) -> None:
        if len(state.offsets) != ROTOR_COUNT:
            raise ValueError(
                f"state has {len(state.offsets)} offsets, expected {ROTOR_COUNT}"
            )
        self._offsets = [o % ALPHABET_SIZE for o in state.offsets]
        self._right_step_count = state.right_step_count

    def __repr__(self) -> str:
        return (
            f"<SteppingMechanism offsets={self._offsets} "
            f"steps={self._right_step_count}>"
        )
