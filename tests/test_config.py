"""
Tests for TOML configuration loading and machine construction from it.

Run with: pytest tests/test_config.py -v
"""

import pytest

from enigma.core.engine import EnigmaMachine
from enigma.core.models import RotorPositions
from enigma.core.wiring import REFLECTOR_WIRINGS, ROTOR_WIRINGS, WiringError
from shared.config import EnigmaConfig, MachineConfig


def write_config(tmp_path, body: str):
    path = tmp_path / "machine.toml"
    path.write_text(body, encoding="utf-8")
    return path


class TestDefaults:
    """Built-in defaults describe rotors I-II-III with reflector B."""

    def test_default_wiring(self):
        machine = MachineConfig()
        assert machine.rotor_wirings == [ROTOR_WIRINGS["I"], ROTOR_WIRINGS["II"], ROTOR_WIRINGS["III"]]
        assert machine.reflector_wiring == REFLECTOR_WIRINGS["B"]
        assert machine.start_positions == "AAA"
        assert machine.plugboard == ""


class TestLoad:
    """Loading from TOML files."""

    def test_load_sections(self, tmp_path):
        path = write_config(tmp_path, """
[global]
log_level = "DEBUG"

[machine]
start_positions = "BCD"
plugboard = "A BC D"
""")
        config = EnigmaConfig.load(path)
        assert config.global_settings.log_level == "DEBUG"
        assert config.machine.start_positions == "BCD"
        assert config.machine.rotor_wirings[0] == ROTOR_WIRINGS["I"]

    def test_unknown_keys_ignored(self, tmp_path):
        path = write_config(tmp_path, """
[machine]
ring_settings = "AAA"
start_positions = "QQQ"

[spectra]
interface = "eth0"
""")
        config = EnigmaConfig.load(path)
        assert config.machine.start_positions == "QQQ"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            EnigmaConfig.load(tmp_path / "absent.toml")


class TestMachineFromConfig:
    """The engine applies and validates configuration when built."""

    def test_start_positions_and_plugboard_applied(self, tmp_path):
        path = write_config(tmp_path, """
[machine]
start_positions = "BCD"
plugboard = "A BC D"
""")
        machine = EnigmaMachine(EnigmaConfig.load(path), console_output=False)
        assert machine.get_rotor_positions() == RotorPositions.parse("BCD")
        assert [(p.first, p.second) for p in machine.plugboard.pairs] == [("A", "B"), ("C", "D")]
        assert machine.startup_report is not None
        assert machine.startup_report.skipped == []

    def test_startup_report_keeps_skipped_entries(self, tmp_path):
        path = write_config(tmp_path, """
[machine]
plugboard = "A BX"
""")
        machine = EnigmaMachine(EnigmaConfig.load(path), console_output=False)
        report = machine.startup_report
        assert [(p.first, p.second) for p in report.pairs] == [("A", "B")]
        assert [(s.text, s.reason) for s in report.skipped] == [("X", "missing separator")]

    def test_no_plugboard_no_startup_report(self):
        assert EnigmaMachine(console_output=False).startup_report is None

    def test_invalid_rotor_wiring_fails_fast(self):
        config = EnigmaConfig(machine=MachineConfig(
            rotor_wirings=[ROTOR_WIRINGS["I"], ROTOR_WIRINGS["II"], "ABCDEFGHIJKLMNOPQRSTUVWXYY"],
        ))
        with pytest.raises(WiringError):
            EnigmaMachine(config, console_output=False)

    def test_wrong_rotor_count(self):
        config = EnigmaConfig(machine=MachineConfig(
            rotor_wirings=[ROTOR_WIRINGS["I"], ROTOR_WIRINGS["II"]],
        ))
        with pytest.raises(WiringError, match="Expected 3"):
            EnigmaMachine(config, console_output=False)

    def test_non_involutive_reflector(self):
        config = EnigmaConfig(machine=MachineConfig(reflector_wiring=ROTOR_WIRINGS["III"]))
        with pytest.raises(WiringError):
            EnigmaMachine(config, console_output=False)

    def test_bad_start_positions(self):
        config = EnigmaConfig(machine=MachineConfig(start_positions="AB"))
        with pytest.raises(ValueError):
            EnigmaMachine(config, console_output=False)

    def test_custom_wiring_changes_ciphertext(self):
        config = EnigmaConfig(machine=MachineConfig(
            rotor_wirings=[ROTOR_WIRINGS["III"], ROTOR_WIRINGS["II"], ROTOR_WIRINGS["I"]],
        ))
        machine = EnigmaMachine(config, console_output=False)
        state = machine.snapshot()
        ciphertext = machine.encrypt_message("HELLO")
        assert ciphertext != "MFNCZ"
        machine.restore(state)
        assert machine.encrypt_message(ciphertext) == "HELLO"
