"""
musparser - MUS to MIDI converter.

This library provides tools to:
- Read MUS score files (.mus) used by DOS-era games
- Decode the MUS event stream into MIDI events
- Write Standard MIDI Files (Format 0)

Example usage:
    from musparser import MusToMidiConverter

    converter = MusToMidiConverter()
    converter.convert_and_save("d_e1m1.mus", "e1m1.mid")
"""

from loguru import logger

__version__ = "1.0.0"
__author__ = "musparser Contributors"

from musparser.converters.mus_to_midi import (
    ConversionOptions,
    MusToMidiConverter,
    convert_mus_to_midi,
    mus_to_midi,
)
from musparser.formats.midi.writer import MidiWriter
from musparser.formats.mus.decoder import MusEventDecoder
from musparser.formats.mus.reader import MusReader
from musparser.models.event import EventType, MidiEvent
from musparser.models.mus import MusEventType, MusHeader, MusScore
from musparser.utils.validation import (
    MalformedEventError,
    MusParserError,
    OutputCreationError,
    TruncatedInputError,
)

# Library code stays silent unless the application enables it
logger.disable("musparser")

__all__ = [
    "ConversionOptions",
    "MusToMidiConverter",
    "convert_mus_to_midi",
    "mus_to_midi",
    "MidiWriter",
    "MusEventDecoder",
    "MusReader",
    "EventType",
    "MidiEvent",
    "MusEventType",
    "MusHeader",
    "MusScore",
    "MalformedEventError",
    "MusParserError",
    "OutputCreationError",
    "TruncatedInputError",
]
