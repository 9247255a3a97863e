"""Tests for MUS to MIDI conversion and MIDI output framing."""

import io
import struct

import mido
import pytest

from musparser.converters.mus_to_midi import (
    ConversionOptions,
    MusToMidiConverter,
    convert_mus_to_midi,
    mus_to_midi,
)
from musparser.formats.midi.writer import MidiWriter, write_midi_file
from musparser.models.event import MidiEvent
from musparser.utils.validation import (
    MalformedEventError,
    OutputCreationError,
    TruncatedInputError,
)

MIDI_HEADER = b"MThd" + struct.pack(">IHHH", 6, 0, 1, 70)

SONG_TRACK = bytes(
    [
        0x00, 0xC0, 0x1E,
        0x00, 0x90, 0x3C, 0x64,
        0x46, 0x80, 0x3C, 0x40,
        0x00, 0x99, 0x24, 0x7F,
        0x23, 0x91, 0x40, 0x7F,
        0x81, 0x48, 0x81, 0x40, 0x40,
        0x00, 0xFF, 0x2F, 0x00,
    ]
)


class TestMidiWriter:
    """Test cases for MIDI file framing."""

    def test_empty_track_framing(self):
        writer = MidiWriter()
        data = writer.to_bytes()

        assert data == MIDI_HEADER + b"MTrk" + b"\x00\x00\x00\x00"

    def test_track_length(self):
        writer = MidiWriter()
        writer.add_event(MidiEvent.end_of_track(0))

        data = writer.to_bytes()
        assert data[14:18] == b"MTrk"
        assert struct.unpack(">I", data[18:22])[0] == 4
        assert data[22:] == b"\x00\xff\x2f\x00"

    def test_save(self, tmp_path):
        path = tmp_path / "out.mid"
        writer = MidiWriter()
        writer.add_events([MidiEvent.end_of_track(0)])
        writer.save(path)

        assert path.read_bytes() == writer.to_bytes()

    def test_save_unwritable(self, tmp_path):
        """Test that an impossible destination raises OutputCreationError."""
        with pytest.raises(OutputCreationError, match="Cannot write"):
            write_midi_file(b"", tmp_path / "missing_dir" / "out.mid")


class TestMusToMidi:
    """End-to-end conversion tests."""

    def test_minimal_file(self, minimal_mus):
        """Test that a lone finish event produces a 4-byte track."""
        data = mus_to_midi(minimal_mus)

        assert data == MIDI_HEADER + b"MTrk" + struct.pack(">I", 4) + b"\x00\xff\x2f\x00"

    def test_song_bytes(self, song_mus):
        data = mus_to_midi(song_mus)

        assert data[:14] == MIDI_HEADER
        assert struct.unpack(">I", data[18:22])[0] == len(SONG_TRACK)
        assert data[22:] == SONG_TRACK

    def test_song_parses_with_mido(self, song_mus):
        """Test that the output is a valid MIDI file for an independent reader."""
        midi = mido.MidiFile(file=io.BytesIO(mus_to_midi(song_mus)))

        assert midi.type == 0
        assert midi.ticks_per_beat == 70
        assert len(midi.tracks) == 1

        messages = list(midi.tracks[0])
        assert [m.type for m in messages] == [
            "program_change",
            "note_on",
            "note_off",
            "note_on",
            "note_on",
            "note_off",
            "end_of_track",
        ]
        assert [m.time for m in messages] == [0, 0, 70, 0, 35, 200, 0]
        assert messages[3].channel == 9
        assert messages[4].channel == 1
        assert messages[1].velocity == 100
        assert messages[2].velocity == 64

    def test_converter_state(self, song_mus):
        converter = MusToMidiConverter()
        converter.convert_bytes(song_mus)

        assert converter.instruments == [30, 135]
        assert converter.channel_map == {0: 0, 1: 1, 15: 9}
        assert converter.event_count == 7

    def test_converter_reusable(self, song_mus):
        """Test that no channel state leaks between conversions."""
        converter = MusToMidiConverter()
        first = converter.convert_bytes(song_mus)
        second = converter.convert_bytes(song_mus)

        assert first == second

    def test_song_offset_honoured(self, mus_builder):
        """Test that bytes between the patch table and song offset are skipped."""
        data = mus_builder(b"\x10\x3c\x60", song_offset=18)

        assert mus_to_midi(data)[22:] == b"\x00\xff\x2f\x00"

    def test_truncated_stream(self, mus_builder):
        with pytest.raises(TruncatedInputError) as exc:
            mus_to_midi(mus_builder(b"\x10\x3c"))

        assert exc.value.offset == 18

    def test_strict_option(self, mus_builder):
        data = mus_builder(b"\x40\x0a\x00\x60")

        assert mus_to_midi(data)[22:26] == b"\x00\xb0\x00\x00"
        with pytest.raises(MalformedEventError):
            MusToMidiConverter(ConversionOptions(strict=True)).convert_bytes(data)


class TestFileConversion:
    """Test converting files on disk."""

    def test_convert_and_save(self, mus_file, tmp_path):
        output = tmp_path / "song.mid"
        convert_mus_to_midi(mus_file, output)

        assert output.read_bytes()[22:] == SONG_TRACK

    def test_missing_source(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            convert_mus_to_midi(tmp_path / "missing.mus", tmp_path / "out.mid")

    def test_failed_decode_writes_nothing(self, tmp_path, mus_builder):
        """Test that no partial output is left when decoding fails."""
        source = tmp_path / "bad.mus"
        source.write_bytes(mus_builder(b"\x10"))
        output = tmp_path / "bad.mid"

        with pytest.raises(TruncatedInputError):
            convert_mus_to_midi(source, output)

        assert not output.exists()

    def test_unwritable_output(self, mus_file, tmp_path):
        with pytest.raises(OutputCreationError):
            convert_mus_to_midi(mus_file, tmp_path / "no" / "such" / "dir.mid")
