"""
Enigma Console Output
======================

Rich-based formatters for machine status, plugboard reports and
encryption results, built on the shared :class:`EnigmaConsole`.
"""

from __future__ import annotations

from typing import Optional

from rich.panel import Panel
from rich.text import Text

from shared.console import EnigmaConsole
from enigma.core.models import (
    EncryptionResult,
    PlugboardPair,
    PlugboardReport,
    RotorPositions,
)


class MachineConsoleOutput:
    """Console output formatters for the simulator.

    Usage::

        console = EnigmaConsole()
        output = MachineConsoleOutput(console)
        output.display_status(machine.get_rotor_positions(), machine.plugboard.pairs)
        output.display_encryption(encryption_result)
    """

    def __init__(self, console: Optional[EnigmaConsole] = None) -> None:
        self.console = console or EnigmaConsole()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Machine status
    # ------------------------------------------------------------------ #

    def display_status(
        self,
        positions: RotorPositions,
        pairs: list[PlugboardPair],
    ) -> None:
        """Show the rotor windows and the plugged cables."""
        self.console.table(
            "Rotor Windows",
            ["Left", "Middle", "Right"],
            [(positions.left, positions.middle, positions.right)],
            styles=["enigma.rotor"] * 3,
        )
        plugged = "  ".join(f"{p.first}-{p.second}" for p in pairs) or "(no cables)"
        self._rich.print(Text.assemble(("Plugboard: ", "bold"), (plugged, "enigma.plug")))

    # ------------------------------------------------------------------ #
    #  Plugboard report
    # ------------------------------------------------------------------ #

    def display_plugboard(self, report: PlugboardReport) -> None:
        """Summarise a plugboard configuration and list skipped chunks."""
        when = "" if report.applied_at is None else f" after space {report.applied_at}"
        if report.pairs:
            self.console.success(
                f"Plugboard set{when}: "
                + " ".join(f"{p.first}-{p.second}" for p in report.pairs)
            )
        else:
            self.console.info(f"Plugboard cleared{when}")

        if report.skipped:
            self.console.table(
                "Skipped Entries",
                ["Position", "Text", "Reason"],
                [(s.position, repr(s.text), s.reason) for s in report.skipped],
                styles=["dim", "bold", "yellow"],
            )

    # ------------------------------------------------------------------ #
    #  Encryption
    # ------------------------------------------------------------------ #

    def display_encryption(self, result: EncryptionResult) -> None:
        """Show the lamp-board output together with the rotor movement."""
        self.console.section("Encryption")

        body = Text()
        body.append("Input:   ", style="bold")
        body.append(f"{result.input_text}\n")
        body.append("Output:  ", style="bold")
        body.append(f"{result.output_text}\n", style="enigma.lamp")
        body.append("Rotors:  ", style="bold")
        body.append(f"{result.start_positions} -> {result.end_positions}\n")
        body.append("Letters: ", style="bold")
        body.append(str(result.letters_processed))

        self._rich.print(Panel(body, title="Lamp Board", border_style="cyan"))

        for report in result.plugboard_reports:
            self.display_plugboard(report)
