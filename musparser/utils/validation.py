"""
Error types and validation helpers for MUS/MIDI data.
"""


MUS_SIGNATURE = b"MUS\x1a"


class MusParserError(Exception):
    """Base class for all conversion errors."""

    pass


class TruncatedInputError(MusParserError):
    """Raised when the MUS data ends before a structure is fully read."""

    def __init__(self, what: str, offset: int, needed: int = 1):
        self.what = what
        self.offset = offset
        self.needed = needed
        super().__init__(
            f"Unexpected end of data reading {what} at offset 0x{offset:04X} "
            f"({needed} byte(s) needed)"
        )


class OutputCreationError(MusParserError):
    """Raised when the destination file cannot be created or written."""

    pass


class MalformedEventError(MusParserError):
    """Raised for MUS events outside the defined instruction set."""

    def __init__(self, message: str, offset: int):
        self.offset = offset
        super().__init__(f"{message} at offset 0x{offset:04X}")


def validate_mus_header(data: bytes) -> bool:
    """
    Check for the MUS signature.

    Args:
        data: File data (at least 4 bytes)

    Returns:
        True if data starts with "MUS\\x1a"
    """
    if len(data) < 4:
        return False

    return data[:4] == MUS_SIGNATURE
