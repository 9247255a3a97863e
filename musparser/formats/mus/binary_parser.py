"""
MUS binary header parser.

MUS File Structure:
    Offset  Size    Description
    0x00    4       Signature "MUS\\x1a"
    0x04    2       Song length (bytes of event data)
    0x06    2       Song offset (start of event data)
    0x08    2       Primary channel count
    0x0A    2       Secondary channel count
    0x0C    2       Instrument count (N)
    0x0E    2       Reserved
    0x10    2*N     Instrument patch numbers
    ...             Event stream (at song offset)

All header words are little-endian.
"""

from typing import List, Optional, Tuple
import struct

from loguru import logger

from musparser.models.mus import MUS_HEADER_SIZE, MusHeader
from musparser.utils.validation import TruncatedInputError


class MusParser:
    """
    Parser for the MUS header and instrument patch table.

    Example:
        parser = MusParser()
        header, instruments = parser.parse_bytes(data)
        events = data[parser.event_offset:]
    """

    HEADER_SIZE = MUS_HEADER_SIZE
    HEADER_FORMAT = "<4sHHHHHH"

    def __init__(self):
        self.data: bytes = b""
        self.header: Optional[MusHeader] = None
        self.instruments: List[int] = []
        self.event_offset: int = 0

    def parse_file(self, filepath: str) -> Tuple[MusHeader, List[int]]:
        """
        Parse the header of a MUS file.

        Args:
            filepath: Path to .mus file

        Returns:
            Tuple of (header, instrument patch list)
        """
        with open(filepath, "rb") as f:
            self.data = f.read()

        return self.parse_bytes(self.data)

    def parse_bytes(self, data: bytes) -> Tuple[MusHeader, List[int]]:
        """
        Parse MUS header data from bytes.

        Args:
            data: Raw file contents

        Returns:
            Tuple of (header, instrument patch list)

        Raises:
            TruncatedInputError: If the header or patch table is incomplete
        """
        self.data = data

        self.header = self._parse_header()
        self.instruments = self._parse_instruments()
        self.event_offset = self._resolve_event_offset()

        logger.debug(
            "MUS header: length={}, offset={}, channels={}+{}, instruments={}",
            self.header.song_length,
            self.header.song_offset,
            self.header.primary_channels,
            self.header.secondary_channels,
            self.header.instrument_count,
        )

        return self.header, self.instruments

    def parse_header(self, data: bytes) -> MusHeader:
        """Parse only the fixed header, without the patch table."""
        self.data = data
        self.header = self._parse_header()
        return self.header

    def _parse_header(self) -> MusHeader:
        """Parse the fixed 16-byte header."""
        if len(self.data) < self.HEADER_SIZE:
            raise TruncatedInputError(
                "MUS header", len(self.data), self.HEADER_SIZE - len(self.data)
            )

        fields = struct.unpack_from(self.HEADER_FORMAT, self.data, 0)
        return MusHeader(*fields)

    def _parse_instruments(self) -> List[int]:
        """Parse the instrument patch table following the header."""
        count = self.header.instrument_count
        end = self.header.table_end

        if len(self.data) < end:
            raise TruncatedInputError(
                "instrument table", len(self.data), end - len(self.data)
            )

        return list(struct.unpack_from(f"<{count}H", self.data, self.HEADER_SIZE))

    def _resolve_event_offset(self) -> int:
        """
        Determine where the event stream starts.

        Returns the header's song offset unless it points into the header
        or patch table, or past the end of the data.
        """
        offset = self.header.song_offset
        table_end = self.header.table_end

        if table_end <= offset < len(self.data):
            return offset

        logger.warning(
            "Song offset 0x{:04X} is outside the event area, reading events from 0x{:04X}",
            offset,
            table_end,
        )
        return table_end

    def dump_structure(self) -> str:
        """
        Generate a text dump of file structure for debugging.

        Returns:
            Formatted structure description
        """
        lines = ["MUS File Structure:"]
        lines.append(f"  File size: {len(self.data)} bytes")

        if self.header:
            lines.append(f"  Signature valid: {self.header.is_valid()}")
            lines.append(f"  Song length: {self.header.song_length} bytes")
            lines.append(f"  Song offset: 0x{self.header.song_offset:04X}")
            lines.append(f"  Primary channels: {self.header.primary_channels}")
            lines.append(f"  Secondary channels: {self.header.secondary_channels}")
            lines.append(f"  Instruments: {self.header.instrument_count}")
            lines.append(f"  Events start: 0x{self.event_offset:04X}")

        return "\n".join(lines)
