"""
Enigma Output Module
=====================

Console display for machine status and encryption results.
"""

from enigma.output.console import MachineConsoleOutput

__all__ = [
    "MachineConsoleOutput",
]
