"""MIDI format handlers."""

from musparser.formats.midi.writer import MidiWriter, write_midi_file

__all__ = ["MidiWriter", "write_midi_file"]
