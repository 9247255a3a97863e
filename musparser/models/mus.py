"""
MUS score data models.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List

from musparser.utils.validation import MUS_SIGNATURE

MUS_HEADER_SIZE = 16


class MusEventType(IntEnum):
    """MUS event actions (bits 4-6 of the event descriptor)."""

    RELEASE_NOTE = 0
    PLAY_NOTE = 1
    PITCH_BEND = 2
    SYSTEM_EVENT = 3
    CONTROLLER = 4
    END_OF_MEASURE = 5
    FINISH = 6
    UNDEFINED = 7


@dataclass(frozen=True)
class MusHeader:
    """
    MUS file header (16 bytes, little-endian).

    Attributes:
        signature: 4 bytes, normally "MUS\\x1a" (not enforced)
        song_length: Length of the event stream in bytes
        song_offset: Offset of the first event from the file start
        primary_channels: Number of primary channels used
        secondary_channels: Number of secondary channels used
        instrument_count: Number of entries in the patch table
        reserved: Unused word
    """

    signature: bytes
    song_length: int
    song_offset: int
    primary_channels: int
    secondary_channels: int
    instrument_count: int
    reserved: int = 0

    def is_valid(self) -> bool:
        """Check if the signature is the standard MUS one."""
        return self.signature == MUS_SIGNATURE

    @property
    def table_end(self) -> int:
        """Offset of the first byte after the instrument patch table."""
        return MUS_HEADER_SIZE + 2 * self.instrument_count


@dataclass
class MusScore:
    """
    A parsed MUS file.

    Attributes:
        header: Parsed header
        instruments: Patch numbers from the instrument table
        events: Raw event stream, starting at the first event
        event_offset: Absolute file offset of events[0]
    """

    header: MusHeader
    instruments: List[int] = field(default_factory=list)
    events: bytes = b""
    event_offset: int = 0
