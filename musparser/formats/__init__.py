"""Format handlers for MUS and MIDI."""

from musparser.formats.mus import MusEventDecoder, MusParser, MusReader
from musparser.formats.midi import MidiWriter

__all__ = ["MusEventDecoder", "MusParser", "MusReader", "MidiWriter"]
