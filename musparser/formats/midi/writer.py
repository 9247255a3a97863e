"""
Standard MIDI File (Format 0) writer.

File Structure:
    Offset  Size    Description
    0x00    4       "MThd"
    0x04    4       Header length (6)
    0x08    2       Format (0)
    0x0A    2       Track count (1)
    0x0C    2       Division (ticks per quarter note)
    0x0E    4       "MTrk"
    0x12    4       Track payload length
    0x16    ...     Track payload

All integers are big-endian.
"""

from pathlib import Path
from typing import Iterable, Union
import struct

from loguru import logger

from musparser.models.event import MidiEvent
from musparser.utils.validation import OutputCreationError

# MUS timing is 140 ticks per second; 70 ticks per quarter at the
# default 120 BPM (no tempo event is written) reproduces it.
DEFAULT_DIVISION = 70


class MidiWriter:
    """
    Writer for single-track MIDI files.

    Events are appended to an in-memory track buffer, which is framed
    with the MThd and MTrk chunk headers on output.

    Example:
        writer = MidiWriter()
        writer.add_event(MidiEvent.end_of_track(0))
        writer.save("song.mid")
    """

    HEADER_MAGIC = b"MThd"
    TRACK_MAGIC = b"MTrk"
    HEADER_LENGTH = 6
    FORMAT = 0

    def __init__(self, division: int = DEFAULT_DIVISION):
        self.division = division
        self._track: bytearray = bytearray()

    @property
    def track_data(self) -> bytes:
        """Encoded track payload written so far."""
        return bytes(self._track)

    def add_event(self, event: MidiEvent) -> None:
        """Append one encoded event to the track."""
        self._track += event.to_bytes()

    def add_events(self, events: Iterable[MidiEvent]) -> None:
        for event in events:
            self.add_event(event)

    def to_bytes(self) -> bytes:
        """
        Build the complete MIDI file.

        Returns:
            MThd chunk followed by the MTrk chunk
        """
        header = self.HEADER_MAGIC + struct.pack(
            ">IHHH", self.HEADER_LENGTH, self.FORMAT, 1, self.division
        )
        track = self.TRACK_MAGIC + struct.pack(">I", len(self._track)) + bytes(self._track)
        return header + track

    def save(self, filepath: Union[str, Path]) -> None:
        """
        Write the MIDI file.

        Args:
            filepath: Output file path

        Raises:
            OutputCreationError: If the file cannot be created or written
        """
        write_midi_file(self.to_bytes(), filepath)


def write_midi_file(data: bytes, filepath: Union[str, Path]) -> None:
    """
    Write MIDI data to disk.

    Raises:
        OutputCreationError: If the file cannot be created or written
    """
    filepath = Path(filepath)

    try:
        with open(filepath, "wb") as f:
            f.write(data)
    except OSError as e:
        raise OutputCreationError(f"Cannot write {filepath}: {e.strerror or e}") from e

    logger.info("Wrote {} ({} bytes)", filepath, len(data))
