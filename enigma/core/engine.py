"""
Enigma Machine Engine
======================

Central orchestrator composing the plugboard, rotor bank, reflector and
stepping mechanism into one machine instance.

Every keypress on a letter first steps the rotors, then sends the signal
along the path

    plugboard -> rotors 0, 1, 2 -> reflector -> rotors 2, 1, 0 -> plugboard

and lights the resulting lamp.  Because the reflector is an involution
the whole path is one too: with the same starting state, enciphering the
ciphertext returns the plaintext.

Each :class:`EnigmaMachine` owns all of its state, so any number of
machines can run side by side.  The engine never reads from the
terminal; callers that want to rewire the plugboard between words pass a
hook to :meth:`EnigmaMachine.encrypt_message`.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from shared.config import EnigmaConfig
from shared.logger import EnigmaLogger
from shared.models import Finding, RunResult, Severity

from enigma.core.alphabet import index_to_letter, is_letter, letter_to_index
from enigma.core.models import (
    EncryptionResult,
    MachineState,
    PlugboardReport,
    RotorPositions,
)
from enigma.core.plugboard import Plugboard
from enigma.core.reflector import Reflector
from enigma.core.rotor import RotorBank
from enigma.core.stepping import LEFT, MIDDLE, RIGHT, ROTOR_COUNT, SteppingMechanism
from enigma.core.wiring import WiringError

#: Called with the index of each space; a returned string rewires the plugboard.
ReconfigureHook = Callable[[int], Optional[str]]


class EnigmaMachine:
    """A single simulated three-rotor machine.

    Usage::

        machine = EnigmaMachine()
        state = machine.snapshot()
        ciphertext = machine.encrypt_message("HELLO")      # 'MFNCZ'

        machine.restore(state)
        assert machine.encrypt_message(ciphertext) == "HELLO"

    Args:
        config:         Configuration; wiring, start positions and plugboard
                        are taken from ``config.machine``.
        console_output: Attach the Rich console log handler.

    Raises:
        WiringError: If the configured rotor or reflector wiring is invalid.
        ValueError:  If the configured start positions are not three letters.
    """

    def __init__(
        self,
        config: Optional[EnigmaConfig] = None,
        *,
        console_output: bool = True,
    ) -> None:
        self.config = config or EnigmaConfig()
        machine = self.config.machine
        if len(machine.rotor_wirings) != ROTOR_COUNT:
            raise WiringError(
                f"Expected {ROTOR_COUNT} rotor wirings, got {len(machine.rotor_wirings)}"
            )
        self._rotors = RotorBank(machine.rotor_wirings)
        self._reflector = Reflector(machine.reflector_wiring)
        self._plugboard = Plugboard()
        self._stepping = SteppingMechanism()
        start = RotorPositions.parse(machine.start_positions)

        settings = self.config.global_settings
        self.logger = EnigmaLogger(
            "engine",
            instance=f"{id(self):x}",
            log_level=settings.log_level,
            log_file=settings.log_file or None,
            json_logs=settings.log_json,
            console_output=console_output,
        )

        self.set_rotor_positions(start.left, start.middle, start.right)
        #: Report for the configured plugboard, ``None`` when none is configured.
        self.startup_report: Optional[PlugboardReport] = None
        if machine.plugboard:
            self.startup_report = self.configure_plugboard(machine.plugboard)

    def close(self) -> None:
        """Close the machine's log handlers (and its log file)."""
        self.logger.close()

    # ------------------------------------------------------------------ #
    #  Settings
    # ------------------------------------------------------------------ #

    def set_rotor_positions(self, left: str, middle: str, right: str) -> None:
        """Turn the rotors to the given window letters.

        Raises:
            ValueError: If any position is not a letter.
        """
        self._stepping.set_positions(
            letter_to_index(left),
            letter_to_index(middle),
            letter_to_index(right),
        )
        self.logger.info(
            f"Rotor positions set to {self.get_rotor_positions()}",
        )

    def get_rotor_positions(self) -> RotorPositions:
        offsets = self._stepping.offsets
        return RotorPositions(
            left=index_to_letter(offsets[LEFT]),
            middle=index_to_letter(offsets[MIDDLE]),
            right=index_to_letter(offsets[RIGHT]),
        )

    def configure_plugboard(self, spec: str) -> PlugboardReport:
        """Replace the plugboard connections; malformed pairs are reported."""
        with self.logger.operation("configure_plugboard"):
            report = self._plugboard.configure(spec)
            for skipped in report.skipped:
                self.logger.warning(
                    f"Skipped plugboard entry {skipped.text!r} at "
                    f"position {skipped.position}: {skipped.reason}",
                    position=skipped.position,
                    reason=skipped.reason,
                )
            self.logger.info(
                f"Plugboard configured with {len(report.pairs)} pair(s)",
                skipped=report.skipped_count,
            )
        return report

    @property
    def plugboard(self) -> Plugboard:
        return self._plugboard

    @property
    def reflector(self) -> Reflector:
        return self._reflector

    @property
    def rotors(self) -> RotorBank:
        return self._rotors

    # ------------------------------------------------------------------ #
    #  State
    # ------------------------------------------------------------------ #

    def snapshot(self) -> MachineState:
        """Capture rotor offsets and the step counter."""
        return self._stepping.snapshot()

    def restore(self, state: MachineState) -> None:
        """Return the rotors to a previously captured state."""
        self._stepping.restore(state)

    def reset(self) -> None:
        """Zero the step counter and turn every rotor to ``A``."""
        self._stepping.reset()
        self.logger.info("Stepping state reset")

    # ------------------------------------------------------------------ #
    #  Encryption
    # ------------------------------------------------------------------ #

    def encrypt_char(self, char: str) -> str:
        """Encipher one keypress.

        Non-letters are returned unchanged and do not move the rotors.
        Letters are accepted in either case; the lamp is always uppercase.
        """
        if not is_letter(char):
            return char

        if self._stepping.step():
            self.logger.debug(
                f"Middle rotor double-stepped after "
                f"{self._stepping.right_step_count} right-rotor steps",
            )
        offsets = self._stepping.offsets

        signal = self._plugboard.apply(letter_to_index(char))
        for rotor_id in range(ROTOR_COUNT):
            signal = self._rotors.forward(signal, rotor_id, offsets[rotor_id])
        signal = self._reflector.reflect(signal)
        for rotor_id in reversed(range(ROTOR_COUNT)):
            signal = self._rotors.backward(signal, rotor_id, offsets[rotor_id])
        signal = self._plugboard.apply(signal)
        return index_to_letter(signal)

    def encrypt_message(
        self,
        text: str,
        reconfigure: Optional[ReconfigureHook] = None,
    ) -> str:
        """Encipher *text* left to right.

        Args:
            text:        Message text; non-letters pass through verbatim.
            reconfigure: Optional hook called with the index of every space
                         after it has been emitted.  Returning a string
                         rewires the plugboard before the next character;
                         returning ``None`` leaves it unchanged.

        Returns:
            The enciphered text, the same length as *text*.
        """
        output: list[str] = []
        for index, char in enumerate(text):
            output.append(self.encrypt_char(char))
            if char == " " and reconfigure is not None:
                new_spec = reconfigure(index)
                if new_spec is not None:
                    self.configure_plugboard(new_spec)
        return "".join(output)

    def process(
        self,
        text: str,
        reconfigure: Optional[ReconfigureHook] = None,
        *,
        setup_reports: Sequence[PlugboardReport] = (),
    ) -> RunResult:
        """Encipher *text* and wrap the outcome in a :class:`RunResult`.

        Args:
            text:          Message text.
            reconfigure:   Rewiring hook, as for :meth:`encrypt_message`.
            setup_reports: Reports of plugboard settings made for this run
                           before the first letter (configuration file,
                           command-line option).

        The result's ``metadata`` is an :class:`EncryptionResult` dump
        listing *setup_reports* followed by one report per mid-message
        rewiring.  Every report with skipped entries becomes a finding.
        """
        result = RunResult(
            tool_name="enigma",
            target=text[:64] + ("..." if len(text) > 64 else ""),
        )
        reports: list[PlugboardReport] = list(setup_reports)

        def _rewire(index: int) -> None:
            new_spec = reconfigure(index) if reconfigure is not None else None
            if new_spec is not None:
                report = self.configure_plugboard(new_spec)
                reports.append(report.model_copy(update={"applied_at": index}))

        start = self.get_rotor_positions()
        with self.logger.operation("encrypt_message"), self.logger.timed("encrypt_message"):
            output = self.encrypt_message(text, _rewire)

        letters = sum(1 for ch in text if is_letter(ch))
        payload = EncryptionResult(
            input_text=text,
            output_text=output,
            start_positions=start,
            end_positions=self.get_rotor_positions(),
            letters_processed=letters,
            plugboard_reports=reports,
        )
        result.metadata = payload.model_dump()

        for report in reports:
            if report.skipped:
                result.add_finding(_skipped_entries_finding(report))
        if letters == 0:
            result.add_finding(Finding(
                severity=Severity.NOTICE,
                title="No Letters Enciphered",
                description="The message contains no letters; the rotors did not move.",
            ))

        return result.finalize(
            summary=(
                f"Enciphered {letters} letter(s), rotors "
                f"{payload.start_positions} -> {payload.end_positions}"
            )
        )


def _skipped_entries_finding(report: PlugboardReport) -> Finding:
    when = (
        "before the message"
        if report.applied_at is None
        else f"after the space at position {report.applied_at}"
    )
    count = report.skipped_count
    return Finding(
        severity=Severity.WARNING,
        title="Plugboard Entries Skipped",
        description=(
            f"{count} entr{'y' if count == 1 else 'ies'} of {report.spec!r} "
            f"(set {when}) could not be used; "
            f"{len(report.pairs)} pair(s) were plugged."
        ),
        evidence=[s.model_dump() for s in report.skipped],
        recommendation="Write pairs as 'A BC DE F' (three characters per pair).",
    )
