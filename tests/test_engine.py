"""
Tests for the machine engine: golden values, reciprocity, passthrough
and mid-message plugboard rewiring.

Run with: pytest tests/test_engine.py -v
"""

import string

import pytest

from enigma.core.engine import EnigmaMachine
from enigma.core.models import EncryptionResult, RotorPositions
from shared.config import EnigmaConfig, GlobalConfig
from shared.models import Severity


def positions(text: str) -> RotorPositions:
    return RotorPositions.parse(text)


class TestGoldenValues:
    """Fixed outputs of the default machine from AAA with no plugs."""

    def test_single_letter(self, machine):
        assert machine.encrypt_char("A") == "F"

    def test_single_letter_reciprocal(self, machine):
        state = machine.snapshot()
        assert machine.encrypt_char("A") == "F"
        machine.restore(state)
        assert machine.encrypt_char("F") == "A"

    def test_hello(self, machine):
        assert machine.encrypt_message("HELLO") == "MFNCZ"

    def test_hello_has_no_self_encipherment(self, machine):
        ciphertext = machine.encrypt_message("HELLO")
        assert len(ciphertext) == 5
        assert all(c != p for c, p in zip(ciphertext, "HELLO"))

    def test_lowercase_input_gives_uppercase_output(self, machine):
        assert machine.encrypt_message("hello") == "MFNCZ"


class TestReciprocity:
    """Enciphering the ciphertext from the same state restores the plaintext."""

    @pytest.mark.parametrize("start", ["AAA", "QEV", "ZZZ", "MCK"])
    @pytest.mark.parametrize("plugs", ["", "A BC DE FQ Z"])
    def test_every_letter(self, machine, start, plugs):
        machine.configure_plugboard(plugs)
        p = positions(start)
        machine.set_rotor_positions(p.left, p.middle, p.right)
        for letter in string.ascii_uppercase:
            state = machine.snapshot()
            cipher = machine.encrypt_char(letter)
            assert cipher != letter
            machine.restore(state)
            assert machine.encrypt_char(cipher) == letter
            machine.restore(state)

    def test_message_round_trip_across_double_step(self, machine):
        """A long message crosses several double-steps and still decrypts."""
        plaintext = "THE QUICK BROWN FOX JUMPS OVER THE LAZY DOG " * 4
        machine.configure_plugboard("P OR SX Y")
        state = machine.snapshot()
        ciphertext = machine.encrypt_message(plaintext)
        machine.restore(state)
        assert machine.encrypt_message(ciphertext) == plaintext

    def test_independent_machines_do_not_share_state(self):
        first = EnigmaMachine(console_output=False)
        second = EnigmaMachine(console_output=False)
        first.encrypt_message("ABCDEFGHIJ")
        assert second.get_rotor_positions() == positions("AAA")
        assert second.encrypt_message("HELLO") == "MFNCZ"


class TestPassthrough:
    """Non-letters neither change nor step the machine."""

    @pytest.mark.parametrize("char", [" ", "1", ",", "\n", "é", "ß"])
    def test_non_letter_unchanged(self, machine, char):
        state = machine.snapshot()
        assert machine.encrypt_char(char) == char
        assert machine.snapshot() == state

    def test_punctuation_in_message(self, machine):
        ciphertext = machine.encrypt_message("HELLO, WORLD!")
        assert ciphertext.startswith("MFNCZ, ")
        assert ciphertext.endswith("!")
        assert machine.get_rotor_positions() == positions("AAK")


class TestStepping:
    """Rotor movement as seen through the engine."""

    def test_each_letter_steps_right_rotor(self, machine):
        machine.encrypt_message("ABC")
        assert machine.get_rotor_positions() == positions("AAD")

    def test_double_step_after_26_letters(self, machine):
        machine.encrypt_message("A" * 26)
        assert machine.get_rotor_positions() == positions("ACA")

    def test_set_positions_does_not_reset_counter(self, machine):
        machine.encrypt_message("A" * 25)
        machine.set_rotor_positions("A", "A", "A")
        machine.encrypt_char("A")
        assert machine.get_rotor_positions() == positions("ACB")

    def test_reset_restarts_counter(self, machine):
        machine.encrypt_message("A" * 25)
        machine.reset()
        machine.encrypt_char("A")
        assert machine.get_rotor_positions() == positions("AAB")

    def test_invalid_position_rejected(self, machine):
        with pytest.raises(ValueError):
            machine.set_rotor_positions("A", "1", "A")


class TestReconfigureHook:
    """Plugboard rewiring between words."""

    def test_hook_called_at_each_space(self, machine):
        calls = []

        def hook(index):
            calls.append(index)
            return None

        machine.encrypt_message("AB CD EF", hook)
        assert calls == [2, 5]

    def test_hook_rewires_for_following_letters(self, machine):
        reference = EnigmaMachine(console_output=False)
        expected = reference.encrypt_message("HELLO ")
        reference.configure_plugboard("A BW O")
        expected += reference.encrypt_message("WORLD")

        ciphertext = machine.encrypt_message(
            "HELLO WORLD", lambda index: "A BW O" if index == 5 else None
        )
        assert ciphertext == expected

    def test_no_hook_no_rewire(self, machine):
        assert machine.encrypt_message("HELLO WORLD")[:6] == "MFNCZ "


class TestProcess:
    """The RunResult wrapper used by the CLI."""

    def test_payload(self, machine):
        result = machine.process("HELLO")
        payload = EncryptionResult(**result.metadata)
        assert payload.output_text == "MFNCZ"
        assert payload.letters_processed == 5
        assert payload.start_positions == positions("AAA")
        assert payload.end_positions == positions("AAF")
        assert result.findings == []
        assert result.end_time is not None
        assert "5 letter" in result.summary

    def test_skipped_rewire_entries_become_findings(self, machine):
        result = machine.process("AB CD", lambda index: "A B C D")
        payload = EncryptionResult(**result.metadata)
        assert len(payload.plugboard_reports) == 1
        assert payload.plugboard_reports[0].skipped_count == 2
        assert payload.plugboard_reports[0].applied_at == 2
        assert [f.severity for f in result.findings] == [Severity.WARNING]
        assert "after the space at position 2" in result.findings[0].description

    def test_setup_reports_come_first(self, machine):
        setup = machine.configure_plugboard("A B C D")
        result = machine.process("AB CD", lambda index: "E F", setup_reports=[setup])
        payload = EncryptionResult(**result.metadata)
        assert [r.spec for r in payload.plugboard_reports] == ["A B C D", "E F"]
        assert [r.applied_at for r in payload.plugboard_reports] == [None, 2]
        assert len(result.findings) == 1
        assert "before the message" in result.findings[0].description

    def test_clean_setup_report_raises_no_finding(self, machine):
        setup = machine.configure_plugboard("A BC D")
        result = machine.process("HELLO", setup_reports=[setup])
        assert result.findings == []
        assert EncryptionResult(**result.metadata).plugboard_reports[0].skipped_count == 0

    def test_no_letters_finding(self, machine):
        result = machine.process("123 456")
        assert [f.severity for f in result.findings] == [Severity.NOTICE]
        assert machine.get_rotor_positions() == positions("AAA")


class TestMachineLogs:
    """Each machine writes through its own logger."""

    @staticmethod
    def _machine(log_file) -> EnigmaMachine:
        config = EnigmaConfig(global_settings=GlobalConfig(log_file=str(log_file)))
        return EnigmaMachine(config, console_output=False)

    def test_machines_keep_separate_log_files(self, tmp_path):
        first = self._machine(tmp_path / "first.log")
        second = self._machine(tmp_path / "second.log")
        assert first.logger.name != second.logger.name

        first.configure_plugboard("A B C D")
        first.close()
        second.close()

        assert "Skipped plugboard entry" in (tmp_path / "first.log").read_text(encoding="utf-8")
        assert "Skipped plugboard entry" not in (tmp_path / "second.log").read_text(encoding="utf-8")

    def test_second_machine_leaves_first_handlers_attached(self, tmp_path):
        first = self._machine(tmp_path / "first.log")
        (handler,) = first.logger.handlers
        second = self._machine(tmp_path / "second.log")
        assert first.logger.handlers == (handler,)
        first.close()
        second.close()

    def test_close_releases_log_file(self, tmp_path):
        machine = self._machine(tmp_path / "closed.log")
        (handler,) = machine.logger.handlers
        machine.close()
        assert machine.logger.handlers == ()
        assert handler.stream is None
