"""
Enigma Shared Module
=====================

Configuration, logging, console presentation and result models shared
by the simulator's engine and command-line interface.
"""

from shared.config import EnigmaConfig

__all__ = ["EnigmaConfig"]
