"""
Operator Console
=================

:class:`EnigmaConsole` is the simulator's presentation layer: the
start-up banner, section rules, one-line operator messages and the
tables behind the rotor windows, plugboard reports and run diagnostics.

Colours follow the machine itself: lit lamps are yellow, rotor windows
cyan and plug cables magenta.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from shared.models import Finding, Severity

MACHINE_THEME = Theme(
    {
        "enigma.banner": "bold bright_cyan",
        "enigma.section": "bold bright_magenta",
        "enigma.lamp": "bold bright_yellow",
        "enigma.rotor": "bold bright_cyan",
        "enigma.plug": "bold magenta",
        "enigma.ok": "bold green",
        "enigma.note": "bold bright_blue",
        "enigma.fault": "bold red",
    }
)

_SEVERITY_STYLE: dict[Severity, str] = {
    Severity.WARNING: "bold dark_orange",
    Severity.NOTICE: "enigma.note",
}

_BANNER_ART = r"""
  ███████╗███╗   ██╗██╗ ██████╗ ███╗   ███╗ █████╗
  ██╔════╝████╗  ██║██║██╔════╝ ████╗ ████║██╔══██╗
  █████╗  ██╔██╗ ██║██║██║  ███╗██╔████╔██║███████║
  ██╔══╝  ██║╚██╗██║██║██║   ██║██║╚██╔╝██║██╔══██║
  ███████╗██║ ╚████║██║╚██████╔╝██║ ╚═╝ ██║██║  ██║
  ╚══════╝╚═╝  ╚═══╝╚═╝ ╚═════╝ ╚═╝     ╚═╝╚═╝  ╚═╝"""


class EnigmaConsole:
    """Themed wrapper around :class:`rich.console.Console`.

    Args:
        quiet: Print nothing (``--quiet`` and library use).
    """

    def __init__(self, *, quiet: bool = False) -> None:
        self._console = Console(theme=MACHINE_THEME, quiet=quiet, highlight=False)

    @property
    def rich(self) -> Console:
        return self._console

    def banner(self, version: str) -> None:
        body = Text(_BANNER_ART, style="enigma.banner")
        body.append("\n\nThree-Rotor Cipher Machine Simulator", style="enigma.lamp")
        body.append(f"\nversion {version}", style="dim")
        self._console.print(
            Panel(Align.center(body), border_style="enigma.rotor", padding=(1, 2))
        )

    def section(self, title: str) -> None:
        self._console.rule(f"  {title}  ", style="enigma.section")

    # ------------------------------------------------------------------ #
    #  Operator messages
    # ------------------------------------------------------------------ #

    def _say(self, style: str, mark: str, message: str) -> None:
        line = Text(f"{mark} ", style=style)
        line.append(message)
        self._console.print(line)

    def success(self, message: str) -> None:
        self._say("enigma.ok", "✔", message)

    def info(self, message: str) -> None:
        self._say("enigma.note", "ℹ", message)

    def error(self, message: str) -> None:
        self._say("enigma.fault", "✘", message)

    # ------------------------------------------------------------------ #
    #  Tables
    # ------------------------------------------------------------------ #

    @staticmethod
    def _framed(title: str) -> Table:
        return Table(
            title=title,
            border_style="enigma.rotor",
            header_style="enigma.section",
            show_lines=True,
        )

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        styles: Sequence[str] = (),
    ) -> None:
        """Print *rows* under *columns*; ``styles`` colours columns in order."""
        tbl = self._framed(title)
        for idx, name in enumerate(columns):
            tbl.add_column(name, style=styles[idx] if idx < len(styles) else "")
        for row in rows:
            tbl.add_row(*(str(cell) for cell in row))
        self._console.print(tbl)

    def diagnostics(self, findings: Sequence[Finding]) -> None:
        """List a run's findings; prints nothing when there are none."""
        if not findings:
            return
        tbl = self._framed("Diagnostics")
        tbl.add_column("#", style="dim", justify="right")
        tbl.add_column("Severity")
        tbl.add_column("Title")
        tbl.add_column("Description", ratio=2)
        for idx, finding in enumerate(findings, start=1):
            tbl.add_row(
                str(idx),
                Text(finding.severity.value, style=_SEVERITY_STYLE[finding.severity]),
                finding.title,
                finding.description,
            )
        self._console.print(tbl)
