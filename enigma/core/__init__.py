"""
Enigma Core Module
===================

Machine components, the orchestrating engine and data models.
"""

from enigma.core.engine import EnigmaMachine, ReconfigureHook
from enigma.core.models import (
    EncryptionResult,
    MachineState,
    PlugboardPair,
    PlugboardReport,
    RotorPositions,
    SkippedPair,
)
from enigma.core.wiring import WiringError

__all__ = [
    "EncryptionResult",
    "EnigmaMachine",
    "MachineState",
    "PlugboardPair",
    "PlugboardReport",
    "ReconfigureHook",
    "RotorPositions",
    "SkippedPair",
    "WiringError",
]
