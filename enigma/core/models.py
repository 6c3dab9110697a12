"""
Enigma Core Data Models
========================

Pydantic models describing machine settings, plugboard configuration
reports, state snapshots and encryption results.  All models are
serialisable to JSON for the CLI's ``--output json`` mode.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RotorPositions(BaseModel):
    """Rotor window letters as read on the machine, left to right."""

    model_config = ConfigDict(frozen=True)

    left: str
    middle: str
    right: str

    @field_validator("left", "middle", "right")
    @classmethod
    def _single_letter(cls, v: str) -> str:
        if len(v) != 1 or not (v.isascii() and v.isalpha()):
            raise ValueError(f"rotor position must be a single letter, got {v!r}")
        return v.upper()

    @classmethod
    def parse(cls, text: str) -> RotorPositions:
        """Build positions from ``"ABC"`` or ``"A B C"`` style input."""
        letters = "".join(text.split())
        if len(letters) != 3:
            raise ValueError(
                f"expected three rotor letters (left middle right), got {text!r}"
            )
        return cls(left=letters[0], middle=letters[1], right=letters[2])

    def __str__(self) -> str:
        return f"{self.left} {self.middle} {self.right}"


class PlugboardPair(BaseModel):
    """One plugboard cable connecting two letters."""

    model_config = ConfigDict(frozen=True)

    first: str
    second: str


class SkippedPair(BaseModel):
    """A configuration chunk the plugboard could not use.

    Attributes:
        position: Character offset of the chunk in the configuration text.
        text:     The raw chunk text.
        reason:   Why it was skipped.
    """

    position: int
    text: str
    reason: str


class PlugboardReport(BaseModel):
    """Outcome of a plugboard configuration request.

    Attributes:
        spec:       Configuration text as given.
        pairs:      Cables that were plugged.
        skipped:    Chunks that could not be used.
        applied_at: Index of the space after which this wiring took
                    effect, or ``None`` when set before the message.
    """

    spec: str
    pairs: list[PlugboardPair] = Field(default_factory=list)
    skipped: list[SkippedPair] = Field(default_factory=list)
    applied_at: Optional[int] = None

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class MachineState(BaseModel):
    """Snapshot of the stepping state of one machine.

    Attributes:
        offsets:          Rotor offsets, index 0 is the rightmost rotor.
        right_step_count: Right-rotor steps since construction or reset.
    """

    model_config = ConfigDict(frozen=True)

    offsets: tuple[int, ...]
    right_step_count: int = Field(default=0, ge=0)


class EncryptionResult(BaseModel):
    """Payload of one message run.

    Attributes:
        input_text:        Text as typed.
        output_text:       Text shown on the lamp board.
        start_positions:   Rotor windows before the first letter.
        end_positions:     Rotor windows after the last letter.
        letters_processed: Keypresses that stepped the rotors.
        plugboard_reports: Wiring set before the message, then one report
                           per mid-message rewiring.
    """

    input_text: str
    output_text: str
    start_positions: RotorPositions
    end_positions: RotorPositions
    letters_processed: int = 0
    plugboard_reports: list[PlugboardReport] = Field(default_factory=list)
