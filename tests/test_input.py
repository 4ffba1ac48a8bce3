"""Tests for the keyboard, pointer and MIDI input collaborators."""

from unittest.mock import Mock, patch

import mido
import pytest

from drumpad.core import PadSession
from drumpad.exceptions import MidiPortNotFoundError
from drumpad.input import DEFAULT_KEYMAP, KeyboardInput, MidiPadInput, PointerInput, note_to_pad, pad_to_note
from drumpad.models import Category, PadAction, PadKey


@pytest.fixture
def mock_session():
    session = Mock(spec=PadSession)
    session.trigger_key.return_value = True
    return session


@pytest.mark.unit
class TestKeyboardInput:
    """Test key-down/key-up handling."""

    def test_default_keymap_covers_grid(self):
        assert len(DEFAULT_KEYMAP) == 32
        assert set(DEFAULT_KEYMAP.values()) == set(PadKey.all())
        assert DEFAULT_KEYMAP["1"] == PadKey(category=Category.KICK, index=0)
        assert DEFAULT_KEYMAP[","] == PadKey(category=Category.CLAP, index=7)

    def test_key_down_and_up(self, mock_session, hihat):
        keyboard = KeyboardInput(mock_session)

        assert keyboard.key_down("r") is True
        assert keyboard.held_keys == frozenset({"r"})
        keyboard.key_up("r")

        assert mock_session.trigger_key.call_args_list == [
            ((hihat, PadAction.PRESS),),
            ((hihat, PadAction.RELEASE),),
        ]
        assert keyboard.held_keys == frozenset()

    def test_auto_repeat_dropped(self, mock_session):
        keyboard = KeyboardInput(mock_session)
        keyboard.key_down("a")
        assert keyboard.key_down("a", repeat=True) is False
        assert keyboard.key_down("a") is False
        assert mock_session.trigger_key.call_count == 1

    def test_case_insensitive(self, mock_session, kick):
        keyboard = KeyboardInput(mock_session, keymap={"K": kick})
        keyboard.key_down("k")
        keyboard.key_up("K")
        assert [c.args[1] for c in mock_session.trigger_key.call_args_list] == [
            PadAction.PRESS,
            PadAction.RELEASE,
        ]

    def test_unmapped_key(self, mock_session):
        keyboard = KeyboardInput(mock_session)
        assert keyboard.key_down("F5") is False
        assert keyboard.key_up("F5") is False
        mock_session.trigger_key.assert_not_called()

    def test_with_real_session(self, session, scheduler, kick):
        keyboard = KeyboardInput(session)
        keyboard.key_down("1")
        scheduler.advance(0.6)
        keyboard.key_down("1", repeat=True)
        keyboard.key_up("1")

        assert not session.is_pressed(kick)
        assert len(session.registry) == 0


@pytest.mark.unit
class TestPointerInput:
    """Test pointer down/up handling."""

    def test_pointer_up_releases_everything(self, mock_session, kick, hihat):
        pointer = PointerInput(mock_session)
        pointer.pointer_down("kick", 0)
        pointer.pointer_down(Category.HIHAT, 3)

        assert pointer.pointer_up() == [kick, hihat]
        releases = [c.args for c in mock_session.trigger_key.call_args_list if c.args[1] is PadAction.RELEASE]
        assert releases == [(kick, PadAction.RELEASE), (hihat, PadAction.RELEASE)]
        assert pointer.pointer_up() == []

    def test_invalid_pad(self, mock_session):
        pointer = PointerInput(mock_session)
        assert pointer.pointer_down("kick", 12) is False
        mock_session.trigger_key.assert_not_called()


@pytest.mark.unit
class TestNoteMapping:
    """Test MIDI note <-> pad mapping."""

    @pytest.mark.parametrize(
        "note,expected",
        [
            (36, PadKey(category=Category.KICK, index=0)),
            (43, PadKey(category=Category.KICK, index=7)),
            (44, PadKey(category=Category.HIHAT, index=0)),
            (67, PadKey(category=Category.CLAP, index=7)),
            (35, None),
            (68, None),
        ],
    )
    def test_note_to_pad(self, note, expected):
        assert note_to_pad(note) == expected

    def test_inverse(self):
        for key in PadKey.all():
            assert note_to_pad(pad_to_note(key, 48), 48) == key

    def test_custom_base_note(self):
        assert note_to_pad(0, base_note=0) == PadKey(category=Category.KICK, index=0)


@pytest.mark.unit
class TestMidiPadInput:
    """Test MIDI message handling."""

    @pytest.fixture
    def deliver(self):
        return Mock()

    @pytest.fixture
    def midi(self, deliver):
        return MidiPadInput(deliver)

    def test_note_on_off(self, midi, deliver, kick):
        midi.handle(mido.Message("note_on", note=36, velocity=100))
        midi.handle(mido.Message("note_off", note=36))

        assert deliver.call_args_list == [
            ((kick, PadAction.PRESS),),
            ((kick, PadAction.RELEASE),),
        ]

    def test_zero_velocity_is_release(self, midi, deliver, kick):
        midi.handle(mido.Message("note_on", note=36, velocity=100))
        midi.handle(mido.Message("note_on", note=36, velocity=0))
        assert deliver.call_args_list[-1] == ((kick, PadAction.RELEASE),)

    def test_repeated_note_on_dropped(self, midi, deliver):
        midi.handle(mido.Message("note_on", note=40, velocity=90))
        midi.handle(mido.Message("note_on", note=40, velocity=90))
        assert deliver.call_count == 1

    def test_ignores_other_messages(self, midi, deliver):
        midi.handle(mido.Message("control_change", control=1, value=64))
        midi.handle(mido.Message("note_on", note=100, velocity=100))
        deliver.assert_not_called()

    def test_deliver_errors_are_contained(self, deliver):
        deliver.side_effect = RuntimeError("loop closed")
        midi = MidiPadInput(deliver)
        midi.handle(mido.Message("note_on", note=36, velocity=100))
        deliver.assert_called_once()


@pytest.mark.unit
class TestMidiPorts:
    """Test opening MIDI ports."""

    @patch("drumpad.input.midi.mido")
    def test_open_first_available(self, mock_mido):
        mock_mido.get_input_names.return_value = ["Pads A", "Pads B"]
        midi = MidiPadInput(Mock())

        assert midi.open() == "Pads A"
        mock_mido.open_input.assert_called_once_with("Pads A", callback=midi.handle)
        assert midi.is_open

        midi.close()
        mock_mido.open_input.return_value.close.assert_called_once()
        assert not midi.is_open

    @patch("drumpad.input.midi.mido")
    def test_open_named_port(self, mock_mido):
        mock_mido.get_input_names.return_value = ["Pads A", "Pads B"]
        assert MidiPadInput(Mock()).open("Pads B") == "Pads B"

    @patch("drumpad.input.midi.mido")
    def test_missing_port(self, mock_mido):
        mock_mido.get_input_names.return_value = ["Pads A"]
        with pytest.raises(MidiPortNotFoundError) as exc_info:
            MidiPadInput(Mock()).open("Keys")
        assert "Pads A" in exc_info.value.recovery_hint
        mock_mido.open_input.assert_not_called()

    @patch("drumpad.input.midi.mido")
    def test_no_ports(self, mock_mido):
        mock_mido.get_input_names.return_value = []
        with pytest.raises(MidiPortNotFoundError, match="No MIDI input ports"):
            MidiPadInput(Mock()).open()
