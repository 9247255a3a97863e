"""Data models for MUS scores and MIDI events."""

from musparser.models.event import EventType, MidiEvent
from musparser.models.mus import MusEventType, MusHeader, MusScore

__all__ = [
    "EventType",
    "MidiEvent",
    "MusEventType",
    "MusHeader",
    "MusScore",
]
