"""
Enigma Configuration Management
================================

Centralized configuration for the Enigma simulator using Python
dataclasses and TOML-based loading.

The machine section describes the physical build of the simulated
machine (rotor and reflector wiring) together with its daily settings
(start positions and plugboard pairs).  Runtime state such as rotor
offsets is never written back.

References:
    - PEP 681 -- Data Class Transforms (2022).
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"


# ========================== Machine Config =================================


@dataclass(frozen=False, slots=True)
class MachineConfig:
    """Configuration for the simulated rotor machine.

    Rotor wirings are listed right to left: the first entry is the
    fastest (rightmost) rotor.  Start positions are written left,
    middle, right, the way the rotor windows read on the machine.

    Reference:
        Kruh, L. & Deavours, C. (2002). The Commercial Enigma: Beginnings
        of Machine Cryptography. Cryptologia, 26(1), 1-16.
    """

    rotor_wirings: list[str] = field(
        default_factory=lambda: [
            "EKMFLGDQVZNTOWYHXUSPAIBRCJ",  # I
            "AJDKSIRUXBLHWTMCQGZNPYFVOE",  # II
            "BDFHJLCPRTXVZNYEIWGAKMUSQO",  # III
        ]
    )
    reflector_wiring: str = "YRUHQSLDPXNGOKMIEBFZCWVJAT"  # UKW-B
    start_positions: str = "AAA"
    plugboard: str = ""
    output_format: str = "console"


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging verbosity and log destinations."""

    log_level: str = "INFO"
    log_file: str = ""
    log_json: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class EnigmaConfig:
    """Master configuration aggregating machine and global settings.

    Usage:
        >>> config = EnigmaConfig.load()                  # from default path
        >>> config = EnigmaConfig.load("daily.toml")      # from custom path
        >>> print(config.machine.start_positions)
        'AAA'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    machine: MachineConfig = field(default_factory=MachineConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> EnigmaConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``config.toml`` in the
        project root.  Missing keys gracefully fall back to dataclass
        defaults -- no ``KeyError`` is raised.

        Args:
            path: Filesystem path to a TOML configuration file.
                  Defaults to ``<project_root>/config.toml``.

        Returns:
            A fully-populated :class:`EnigmaConfig` instance.

        Raises:
            FileNotFoundError: If the file does not exist
                *and* was explicitly provided by the caller.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            machine=cls._build_section(MachineConfig, raw.get("machine", {})),
        )

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are silently ignored so that
        forward-compatible config files do not break older code.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)
