"""
MUS file reader.

Reads .mus files into a MusScore (header, instrument table, event stream).
"""

from pathlib import Path
from typing import Union

from musparser.formats.mus.binary_parser import MusParser
from musparser.models.mus import MusScore
from musparser.utils.validation import validate_mus_header


class MusReader:
    """
    Reader for MUS score files.

    Example:
        score = MusReader.read("d_e1m1.mus")
        print(f"Instruments: {score.instruments}")
    """

    def __init__(self):
        self.parser = MusParser()
        self._raw_data: bytes = b""

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> MusScore:
        """
        Read a MUS file and return a MusScore.

        Args:
            filepath: Path to .mus file

        Returns:
            Parsed MusScore object
        """
        reader = cls()
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> MusScore:
        """
        Parse a MUS file.

        Raises:
            FileNotFoundError: If the file does not exist
            TruncatedInputError: If the header or patch table is incomplete
        """
        filepath = Path(filepath)

        with open(filepath, "rb") as f:
            self._raw_data = f.read()

        return self.parse_bytes(self._raw_data)

    def parse_bytes(self, data: bytes) -> MusScore:
        """
        Parse MUS data from bytes.

        Args:
            data: Raw MUS file contents

        Returns:
            Parsed MusScore object
        """
        self._raw_data = data

        header, instruments = self.parser.parse_bytes(data)
        offset = self.parser.event_offset

        return MusScore(
            header=header,
            instruments=instruments,
            events=data[offset:],
            event_offset=offset,
        )

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file carries the MUS signature.

        Conversion does not require this; it is a hint for callers.
        """
        filepath = Path(filepath)

        if not filepath.is_file():
            return False

        with open(filepath, "rb") as f:
            return validate_mus_header(f.read(4))

    @classmethod
    def get_file_info(cls, filepath: Union[str, Path]) -> dict:
        """
        Get basic information about a MUS file without decoding events.

        Args:
            filepath: Path to .mus file

        Returns:
            Dictionary with file info
        """
        filepath = Path(filepath)

        with open(filepath, "rb") as f:
            data = f.read()

        info = {
            "valid": validate_mus_header(data),
            "size": len(data),
        }

        if len(data) >= 4:
            info["signature"] = data[:4].hex(" ").upper()

        if len(data) >= MusParser.HEADER_SIZE:
            header = MusParser().parse_header(data)
            info["song_length"] = header.song_length
            info["song_offset"] = header.song_offset
            info["instrument_count"] = header.instrument_count

        return info
