#!/usr/bin/env python3
"""
Example: Convert a MUS score to MIDI

Converts a file and prints what was found in the MUS header.
"""

import sys

sys.path.insert(0, "..")

from pathlib import Path
from musparser import MusToMidiConverter, MusReader


def main():
    if len(sys.argv) != 2:
        print("usage: convert_mus.py file.mus")
        return

    mus_file = Path(sys.argv[1])
    output_mid = mus_file.with_suffix(".mid")

    if not MusReader.can_read(mus_file):
        print(f"Warning: {mus_file} has no MUS signature, converting anyway")

    converter = MusToMidiConverter()
    converter.convert_and_save(mus_file, output_mid)

    header = converter.score.header
    print(f"Song Length: {header.song_length} bytes")
    print(f"Channels: {header.primary_channels} primary, {header.secondary_channels} secondary")
    print(f"Instruments: {converter.instruments}")
    print()

    print("Channel map (MUS -> MIDI):")
    for mus_channel, midi_channel in sorted(converter.channel_map.items()):
        print(f"  {mus_channel:2d} -> {midi_channel:2d}")
    print()

    print(f"Created: {output_mid} ({output_mid.stat().st_size} bytes)")


if __name__ == "__main__":
    main()
