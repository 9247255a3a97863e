"""
MUS to MIDI format converter.

Converts MUS scores (.mus) to Standard MIDI Files (.mid, Format 0).

The conversion process:
1. Parse the MUS header and instrument patch table
2. Seek to the song offset
3. Decode each MUS event and re-encode it as a MIDI event with a
   variable-length delta-time
4. Frame the track with MThd/MTrk chunk headers
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union
import io

from loguru import logger

from musparser.formats.midi.writer import DEFAULT_DIVISION, MidiWriter, write_midi_file
from musparser.formats.mus.decoder import MusEventDecoder
from musparser.formats.mus.reader import MusReader
from musparser.models.mus import MusScore


@dataclass
class ConversionOptions:
    """
    Conversion settings.

    Attributes:
        strict: Reject undefined MUS events (action 7, unknown system
                or controller codes) instead of converting them to
                controller 0 / ignoring them
    """

    strict: bool = False


class MusToMidiConverter:
    """
    Converter from MUS scores to MIDI Format 0.

    All channel state lives in the decoder created for each call, so a
    converter can be reused for any number of files.

    Attributes:
        options: Conversion settings
        score: Score read by the last conversion
        channel_map: MUS -> MIDI channel assignments of the last conversion
    """

    def __init__(self, options: Optional[ConversionOptions] = None):
        self.options = options or ConversionOptions()
        self.score: Optional[MusScore] = None
        self.channel_map: Dict[int, int] = {}
        self.event_count = 0

    @property
    def instruments(self) -> List[int]:
        return self.score.instruments if self.score else []

    def convert(self, source_path: Union[str, Path]) -> bytes:
        """
        Convert a MUS file to MIDI.

        Args:
            source_path: Path to .mus file

        Returns:
            Complete MIDI file data
        """
        source_path = Path(source_path)

        with open(source_path, "rb") as f:
            mus_data = f.read()

        return self.convert_bytes(mus_data)

    def convert_bytes(self, mus_data: bytes) -> bytes:
        """
        Convert MUS bytes to MIDI.

        Args:
            mus_data: Raw MUS file data

        Returns:
            Complete MIDI file data

        Raises:
            TruncatedInputError: If the data ends early
            MalformedEventError: In strict mode, for undefined events
        """
        self.score = MusReader().parse_bytes(mus_data)

        decoder = MusEventDecoder(
            io.BytesIO(self.score.events),
            strict=self.options.strict,
            base_offset=self.score.event_offset,
        )

        writer = MidiWriter(DEFAULT_DIVISION)
        writer.add_events(decoder.decode())

        self.channel_map = decoder.channels.assignments
        self.event_count = decoder.event_count

        logger.debug(
            "Converted {} events, track length {} bytes",
            self.event_count,
            len(writer.track_data),
        )

        return writer.to_bytes()

    def convert_and_save(
        self, source_path: Union[str, Path], output_path: Union[str, Path]
    ) -> bytes:
        """
        Convert a MUS file and save the MIDI result.

        The output file is only created once conversion has succeeded.

        Args:
            source_path: Path to source .mus file
            output_path: Path for output .mid file

        Returns:
            The MIDI data written

        Raises:
            OutputCreationError: If the output file cannot be written
        """
        midi_data = self.convert(source_path)
        write_midi_file(midi_data, output_path)
        return midi_data


def convert_mus_to_midi(
    source_path: Union[str, Path],
    output_path: Union[str, Path],
    strict: bool = False,
) -> None:
    """
    Convert a MUS file to a MIDI file.

    Convenience function for simple conversion.

    Args:
        source_path: Path to source .mus file
        output_path: Path for output .mid file
        strict: Reject undefined MUS events

    Example:
        convert_mus_to_midi("d_e1m1.mus", "e1m1.mid")
    """
    converter = MusToMidiConverter(ConversionOptions(strict=strict))
    converter.convert_and_save(source_path, output_path)


def mus_to_midi(mus_data: bytes, strict: bool = False) -> bytes:
    """
    Convert MUS bytes to MIDI bytes.

    Args:
        mus_data: Raw MUS file data
        strict: Reject undefined MUS events

    Returns:
        Complete MIDI file data
    """
    return MusToMidiConverter(ConversionOptions(strict=strict)).convert_bytes(mus_data)
