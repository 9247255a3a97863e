"""
MUS to MIDI conversion.

Example:
    from musparser.converters import convert_mus_to_midi

    convert_mus_to_midi("d_runnin.mus", "runnin.mid")
"""

from musparser.converters.mus_to_midi import (
    ConversionOptions,
    MusToMidiConverter,
    convert_mus_to_midi,
    mus_to_midi,
)

__all__ = [
    "ConversionOptions",
    "MusToMidiConverter",
    "convert_mus_to_midi",
    "mus_to_midi",
]
