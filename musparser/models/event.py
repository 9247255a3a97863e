"""
MIDI event data model.
"""

from dataclasses import dataclass
from enum import IntEnum

from musparser.utils.varlen import encode_varlen


class EventType(IntEnum):
    """MIDI status bytes (channel messages carry the channel in the low nibble)."""

    NOTE_OFF = 0x80
    NOTE_ON = 0x90
    CONTROL_CHANGE = 0xB0
    PROGRAM_CHANGE = 0xC0
    PITCH_BEND = 0xE0
    META = 0xFF


# Meta event type for End of Track
META_END_OF_TRACK = 0x2F


@dataclass
class MidiEvent:
    """
    A single MIDI track event.

    Attributes:
        delta_time: Ticks since the previous event
        status: Status byte (event type | channel, or 0xFF for meta)
        data: Data bytes following the status byte
    """

    delta_time: int
    status: int
    data: bytes = b""

    @classmethod
    def channel_message(
        cls, delta_time: int, event_type: EventType, channel: int, *data: int
    ) -> "MidiEvent":
        """Build a channel voice message on a 0-indexed channel."""
        return cls(delta_time, int(event_type) | channel, bytes(data))

    @classmethod
    def end_of_track(cls, delta_time: int) -> "MidiEvent":
        """Build the End of Track meta event (FF 2F 00)."""
        return cls(delta_time, EventType.META, bytes([META_END_OF_TRACK, 0]))

    @property
    def event_type(self) -> int:
        """Status with the channel nibble stripped (meta events unchanged)."""
        if self.status == EventType.META:
            return EventType.META
        return self.status & 0xF0

    @property
    def channel(self) -> int:
        """Channel of a channel message."""
        return self.status & 0x0F

    @property
    def is_end_of_track(self) -> bool:
        return self.status == EventType.META and self.data[:1] == bytes([META_END_OF_TRACK])

    def to_bytes(self) -> bytes:
        """Encode as delta-time + status + data."""
        return encode_varlen(self.delta_time) + bytes([self.status]) + self.data
