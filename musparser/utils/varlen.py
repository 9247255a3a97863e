"""
MIDI variable-length quantity (VLQ) encoding/decoding.

Both MIDI delta-times and MUS delays store unsigned integers as a
big-endian sequence of 7-bit groups. Bit 7 of every byte except the
last is set to signal that another byte follows.

Example:
    Value:  128 (0b1_0000000)
    Groups: 0x01, 0x00
    Output: [0x81, 0x00]

MIDI limits a delta-time to 4 bytes, so the largest encodable value is
0x0FFFFFFF (28 bits).
"""

from typing import BinaryIO, List, Tuple, Union

MAX_VARLEN_BYTES = 4
MAX_VARLEN_VALUE = (1 << (7 * MAX_VARLEN_BYTES)) - 1


def encode_varlen(value: int) -> bytes:
    """
    Encode an integer as a MIDI variable-length quantity.

    Args:
        value: Integer in range 0 to 0x0FFFFFFF

    Returns:
        1 to 4 encoded bytes

    Raises:
        ValueError: If value is negative or needs more than 4 bytes

    Example:
        >>> encode_varlen(0)
        b'\\x00'
        >>> encode_varlen(128)
        b'\\x81\\x00'
    """
    if not 0 <= value <= MAX_VARLEN_VALUE:
        raise ValueError(f"Variable-length value out of range: {value}")

    # Build groups least significant first, then reverse
    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7

    return bytes(reversed(groups))


def decode_varlen(data: Union[bytes, List[int]], offset: int = 0) -> Tuple[int, int]:
    """
    Decode a variable-length quantity from a buffer.

    Args:
        data: Buffer holding the encoded value
        offset: Position of the first encoded byte

    Returns:
        Tuple of (value, offset of the byte after the quantity)

    Raises:
        ValueError: If the buffer ends before the final byte
    """
    if isinstance(data, list):
        data = bytes(data)

    value = 0
    pos = offset
    while True:
        if pos >= len(data):
            raise ValueError(f"Truncated variable-length value at offset {offset}")
        byte = data[pos]
        pos += 1
        value = (value << 7) | (byte & 0x7F)
        if not byte & 0x80:
            return value, pos


def read_varlen(stream: BinaryIO) -> int:
    """
    Read a variable-length quantity from a binary stream.

    Unlike encode_varlen, no length limit is applied: MUS delays may
    use any number of continuation bytes.

    Raises:
        EOFError: If the stream ends before the final byte
    """
    value = 0
    while True:
        raw = stream.read(1)
        if not raw:
            raise EOFError("Stream ended inside a variable-length value")
        byte = raw[0]
        value = (value << 7) | (byte & 0x7F)
        if not byte & 0x80:
            return value
