"""Test configuration and fixtures."""

import struct
import sys
from pathlib import Path
from typing import List

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))


def build_mus(events: bytes, instruments: List[int] = (), primary: int = 1, song_offset=None) -> bytes:
    """Build a MUS file with a standard header around an event stream."""
    table = struct.pack(f"<{len(instruments)}H", *instruments)
    if song_offset is None:
        song_offset = 16 + len(table)
    header = struct.pack(
        "<4sHHHHHH", b"MUS\x1a", len(events), song_offset, primary, 0, len(instruments), 0
    )
    return header + table + events


@pytest.fixture
def mus_builder():
    """Return the MUS file builder."""
    return build_mus


@pytest.fixture
def minimal_mus():
    """MUS data holding only a finish event."""
    return build_mus(b"\x60")


@pytest.fixture
def song_mus():
    """
    A short tune on two channels plus percussion.

    Events:
        ch0 program 30, ch0 play note 60 vel 100 (delay 70)
        ch0 release 60, ch15 play 36 (delay 35)
        ch1 play 64 (delay 200), ch1 release 64, finish
    """
    events = bytes(
        [
            0x40, 0x00, 0x1E,  # ch0 controller 0 -> program 30
            0x90, 0xBC, 0x64, 0x46,  # ch0 play 60, vel 100, delay 70
            0x00, 0x3C,  # ch0 release 60
            0x9F, 0x24, 0x23,  # ch15 play 36, delay 35
            0x91, 0x40, 0x81, 0x48,  # ch1 play 64, delay 200
            0x01, 0x40,  # ch1 release 64
            0x60,  # finish
        ]
    )
    return build_mus(events, instruments=[30, 135])


@pytest.fixture
def mus_file(tmp_path, song_mus):
    """Write the sample tune to disk and return its path."""
    path = tmp_path / "song.mus"
    path.write_bytes(song_mus)
    return path
