"""
Enigma CLI
===========

Click-based command-line interface for the Enigma simulator.

Usage::

    python -m enigma encrypt "HELLO WORLD"
    python -m enigma encrypt "HELLO WORLD" --positions ABC --plugboard "A BC D"
    python -m enigma encrypt "ATTACK AT DAWN" --rewire "6=E FG H"
    python -m enigma status
    python -m enigma shell

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import json
from typing import Optional

import click

from shared.config import EnigmaConfig
from shared.console import EnigmaConsole
from shared.models import RunResult

from enigma import __version__
from enigma.core.engine import EnigmaMachine, ReconfigureHook
from enigma.core.models import EncryptionResult, PlugboardReport, RotorPositions
from enigma.output.console import MachineConsoleOutput


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a machine configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Output format (defaults to the configured machine.output_format).",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner, log output and console rendering.",
)
@click.version_option(__version__, prog_name="enigma")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: Optional[str],
    quiet: bool,
) -> None:
    """Enigma -- Three-Rotor Cipher Machine Simulator.

    Encipher and decipher messages on a simulated rotor machine.  The
    machine is reciprocal: enciphering the ciphertext from the same
    rotor positions and plugboard returns the plaintext.
    """
    ctx.ensure_object(dict)

    enigma_config = EnigmaConfig.load(config) if config else EnigmaConfig()
    ctx.obj["config"] = enigma_config
    ctx.obj["output_format"] = output or enigma_config.machine.output_format
    ctx.obj["quiet"] = quiet

    console = EnigmaConsole(quiet=quiet)
    ctx.obj["console"] = console
    ctx.obj["display"] = MachineConsoleOutput(console)

    try:
        engine = EnigmaMachine(enigma_config, console_output=not quiet)
    except ValueError as exc:
        raise click.ClickException(f"Invalid machine configuration: {exc}") from exc
    ctx.obj["engine"] = engine
    ctx.call_on_close(engine.close)

    if not quiet and ctx.obj["output_format"] == "console":
        console.banner(version=enigma_config.global_settings.version)


def _handle_output(ctx: click.Context, result: RunResult) -> None:
    """Render *result* in the selected output format."""
    if ctx.obj["output_format"] == "json":
        click.echo(json.dumps(
            result.model_dump(mode="json"),
            indent=2,
            ensure_ascii=False,
        ))
        return

    display: MachineConsoleOutput = ctx.obj["display"]
    display.display_encryption(EncryptionResult(**result.metadata))
    ctx.obj["console"].diagnostics(result.findings)


def _parse_rewire(entries: tuple[str, ...]) -> dict[int, str]:
    """Turn ``INDEX=SPEC`` options into a space-index lookup."""
    plan: dict[int, str] = {}
    for entry in entries:
        index, sep, spec = entry.partition("=")
        index = index.strip()
        # ASCII digits only: int() rejects superscripts that isdigit() accepts
        if not sep or not (index.isascii() and index.isdecimal()):
            raise click.BadParameter(
                f"expected INDEX=SPEC, got {entry!r}",
                param_hint="--rewire",
            )
        plan[int(index)] = spec
    return plan


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.argument("text")
@click.option(
    "--positions", "-p",
    default=None,
    help="Rotor start positions, left middle right (e.g. ABC).",
)
@click.option(
    "--plugboard", "-b",
    default=None,
    help="Plugboard pairs, three characters per pair (e.g. 'A BC D').",
)
@click.option(
    "--rewire", "-r",
    multiple=True,
    metavar="INDEX=SPEC",
    help="Rewire the plugboard after the space at INDEX. Repeatable.",
)
@click.pass_context
def encrypt(
    ctx: click.Context,
    text: str,
    positions: Optional[str],
    plugboard: Optional[str],
    rewire: tuple[str, ...],
) -> None:
    """Encipher (or decipher) TEXT.

    Letters are enciphered and step the rotors; every other character
    passes through unchanged.
    """
    engine: EnigmaMachine = ctx.obj["engine"]
    plan = _parse_rewire(rewire)

    if positions is not None:
        try:
            start = RotorPositions.parse(positions)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--positions") from exc
        engine.set_rotor_positions(start.left, start.middle, start.right)

    setup: list[PlugboardReport] = []
    if engine.startup_report is not None:
        setup.append(engine.startup_report)
    if plugboard is not None:
        setup.append(engine.configure_plugboard(plugboard))

    hook: Optional[ReconfigureHook] = plan.get if plan else None
    _handle_output(ctx, engine.process(text, hook, setup_reports=setup))


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the configured rotor positions and plugboard."""
    engine: EnigmaMachine = ctx.obj["engine"]
    positions = engine.get_rotor_positions()
    pairs = engine.plugboard.pairs

    if ctx.obj["output_format"] == "json":
        click.echo(json.dumps(
            {
                "positions": positions.model_dump(),
                "plugboard": [p.model_dump() for p in pairs],
            },
            indent=2,
        ))
    else:
        ctx.obj["display"].display_status(positions, pairs)


@cli.command()
@click.option(
    "--ask-at-spaces/--no-ask-at-spaces",
    default=True,
    help="Offer to rewire the plugboard at every space in a message.",
)
@click.pass_context
def shell(ctx: click.Context, ask_at_spaces: bool) -> None:
    """Interactive operator session.

    Set rotor positions, set the plugboard and encipher messages until
    you choose to quit.  Rotor movement carries over between messages.
    """
    engine: EnigmaMachine = ctx.obj["engine"]
    display: MachineConsoleOutput = ctx.obj["display"]
    console: EnigmaConsole = ctx.obj["console"]

    def _ask(index: int) -> Optional[str]:
        prompt = f"Space detected at position {index}. Change plugboard configuration?"
        if click.confirm(prompt, default=False):
            return click.prompt(
                "Enter new plugboard pairs (e.g. 'A BC D')",
                default="",
                show_default=False,
            )
        return None

    while True:
        display.display_status(engine.get_rotor_positions(), engine.plugboard.pairs)
        click.echo(
            "\nCommands:\n"
            "1: Set rotor positions\n"
            "2: Set plugboard configuration\n"
            "3: Encrypt a message\n"
            "4: Quit"
        )
        command = click.prompt("Enter command", default="", show_default=False).strip()

        if command == "1":
            raw = click.prompt("Enter rotor positions (left middle right, e.g. 'A B C')")
            try:
                start = RotorPositions.parse(raw)
            except ValueError as exc:
                console.error(str(exc))
                continue
            engine.set_rotor_positions(start.left, start.middle, start.right)
            console.success(f"Rotor positions set to: {start}")
        elif command == "2":
            spec = click.prompt(
                "Enter plugboard pairs (e.g. 'A BC D' to swap A-B and C-D)",
                default="",
                show_default=False,
            )
            display.display_plugboard(engine.configure_plugboard(spec))
        elif command == "3":
            text = click.prompt("Enter message to encrypt", default="", show_default=False)
            result = engine.process(text, _ask if ask_at_spaces else None)
            _handle_output(ctx, result)
            console.info("Rotors have advanced during encryption.")
        elif command == "4":
            click.echo("Exiting Enigma simulator.")
            break
        else:
            console.error("Invalid command. Please try again.")


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the Enigma CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
