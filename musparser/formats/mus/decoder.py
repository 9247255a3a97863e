"""
MUS event stream decoder.

Each MUS event starts with a descriptor byte:

    bit 7     delay follows the event
    bits 4-6  action (see MusEventType)
    bits 0-3  MUS channel

followed by 0-2 data bytes depending on the action, then (if bit 7 was
set) a variable-length delay applying before the next event.

The decoder translates events one by one into MidiEvent objects,
assigning MIDI channels in first-seen order and keeping the last note
velocity of every channel.
"""

from typing import BinaryIO, Iterator, List, Optional

from loguru import logger

from musparser.models.event import EventType, MidiEvent
from musparser.models.mus import MusEventType
from musparser.utils.validation import MalformedEventError, TruncatedInputError
from musparser.utils.varlen import MAX_VARLEN_VALUE, read_varlen

NUM_CHANNELS = 16
MUS_PERCUSSION_CHANNEL = 15
MIDI_PERCUSSION_CHANNEL = 9

DEFAULT_VELOCITY = 127
RELEASE_VELOCITY = 64


class ChannelMapper:
    """
    Per-channel state for one conversion.

    MUS channel 15 is always percussion (MIDI channel 9). Other MUS
    channels receive MIDI channels 0, 1, 2, ... in the order they first
    appear, skipping 9.
    """

    def __init__(self):
        self._mapped: List[Optional[int]] = [None] * NUM_CHANNELS
        self._velocity: List[Optional[int]] = [None] * NUM_CHANNELS
        self._assigned = 0
        self._percussion_used = False

    def get_midi_channel(self, mus_channel: int) -> int:
        """Return the MIDI channel for a MUS channel, assigning one if needed."""
        if mus_channel == MUS_PERCUSSION_CHANNEL:
            self._percussion_used = True
            return MIDI_PERCUSSION_CHANNEL

        channel = self._mapped[mus_channel]
        if channel is None:
            channel = self._assigned
            if channel >= MIDI_PERCUSSION_CHANNEL:
                channel += 1
            self._mapped[mus_channel] = channel
            self._assigned += 1
            logger.debug("MUS channel {} -> MIDI channel {}", mus_channel, channel)

        return channel

    def get_velocity(self, mus_channel: int) -> int:
        """Return the cached velocity, initializing it to 127 on first use."""
        if self._velocity[mus_channel] is None:
            self._velocity[mus_channel] = DEFAULT_VELOCITY
        return self._velocity[mus_channel]

    def set_velocity(self, mus_channel: int, velocity: int) -> None:
        self._velocity[mus_channel] = velocity

    @property
    def assignments(self) -> dict:
        """MUS channel -> MIDI channel for every channel seen so far."""
        result = {i: ch for i, ch in enumerate(self._mapped) if ch is not None}
        if self._percussion_used:
            result[MUS_PERCUSSION_CHANNEL] = MIDI_PERCUSSION_CHANNEL
        return result


class MusEventDecoder:
    """
    Decoder translating a MUS event stream into MIDI events.

    Example:
        decoder = MusEventDecoder(io.BytesIO(score.events))
        track = b"".join(event.to_bytes() for event in decoder.decode())
    """

    # System event code -> MIDI controller (value is always 0)
    SYSTEM_CONTROLLERS = {
        10: 120,  # all sounds off
        11: 123,  # all notes off
        12: 126,  # mono
        13: 127,  # poly
        14: 121,  # reset all controllers
    }

    # MUS controller number -> MIDI controller (0 is program change)
    CONTROLLERS = {
        1: 0,  # bank select
        2: 1,  # modulation
        3: 7,  # volume
        4: 10,  # pan
        5: 11,  # expression
        6: 91,  # reverb depth
        7: 93,  # chorus depth
        8: 64,  # sustain pedal
        9: 67,  # soft pedal
    }

    def __init__(self, stream: BinaryIO, strict: bool = False, base_offset: int = 0):
        """
        Initialize decoder.

        Args:
            stream: Binary stream positioned at the first event
            strict: Raise MalformedEventError for undefined events
                    instead of converting them permissively
            base_offset: File offset of the stream start, for error messages
        """
        self.stream = stream
        self.strict = strict
        self.base_offset = base_offset
        self.channels = ChannelMapper()
        self.pending_delay = 0
        self.event_count = 0
        self.finished = False

    @property
    def offset(self) -> int:
        """Current absolute file offset."""
        return self.base_offset + self.stream.tell()

    def decode(self) -> Iterator[MidiEvent]:
        """
        Decode events until the finish event.

        Yields:
            MidiEvent for every MUS event that produces MIDI output

        Raises:
            TruncatedInputError: If the stream ends before the finish event
            MalformedEventError: In strict mode, for undefined events
        """
        while not self.finished:
            start = self.offset
            descriptor = self._read_byte("event descriptor")

            action = (descriptor >> 4) & 0x07
            channel = self.channels.get_midi_channel(descriptor & 0x0F)

            event = self._decode_action(action, descriptor & 0x0F, channel, start)
            self.event_count += 1

            # A finish event ends the stream; any delay after it is irrelevant
            if descriptor & 0x80 and not self.finished:
                self._read_delay()

            if event is not None:
                yield event

        logger.debug("Decoded {} MUS events", self.event_count)

    def _decode_action(
        self, action: int, mus_channel: int, channel: int, start: int
    ) -> Optional[MidiEvent]:
        """Read the data bytes of one event and build its MIDI equivalent."""
        if action == MusEventType.RELEASE_NOTE:
            note = self._read_byte("release note") & 0x7F
            return self._emit(EventType.NOTE_OFF, channel, note, RELEASE_VELOCITY)

        if action == MusEventType.PLAY_NOTE:
            note = self._read_byte("play note")
            velocity = self.channels.get_velocity(mus_channel)
            if note & 0x80:
                velocity = self._read_byte("note velocity")
                self.channels.set_velocity(mus_channel, velocity)
            return self._emit(EventType.NOTE_ON, channel, note & 0x7F, velocity)

        if action == MusEventType.PITCH_BEND:
            bend = self._read_byte("pitch bend") * 64
            return self._emit(EventType.PITCH_BEND, channel, bend & 0x7F, (bend >> 7) & 0x7F)

        if action == MusEventType.SYSTEM_EVENT:
            code = self._read_byte("system event")
            controller = self._lookup(self.SYSTEM_CONTROLLERS, code, "system event", start)
            return self._emit(EventType.CONTROL_CHANGE, channel, controller, 0)

        if action == MusEventType.CONTROLLER:
            number = self._read_byte("controller number")
            value = self._read_byte("controller value")
            if number == 0:
                return self._emit(EventType.PROGRAM_CHANGE, channel, value)
            controller = self._lookup(self.CONTROLLERS, number, "controller", start)
            return self._emit(EventType.CONTROL_CHANGE, channel, controller, value)

        if action == MusEventType.END_OF_MEASURE:
            return None

        if action == MusEventType.FINISH:
            self.finished = True
            return MidiEvent.end_of_track(self._flush_delay())

        # Action 7 is not part of the format
        if self.strict:
            raise MalformedEventError(f"Undefined MUS event action {action}", start)
        logger.warning("Ignoring undefined MUS event action {} at 0x{:04X}", action, start)
        return None

    def _lookup(self, table: dict, code: int, kind: str, start: int) -> int:
        """Map a MUS code through a controller table."""
        if code in table:
            return table[code]

        if self.strict:
            raise MalformedEventError(f"Undefined {kind} code {code}", start)
        logger.warning(
            "Undefined {} code {} at 0x{:04X}, using controller 0", kind, code, start
        )
        return 0

    def _emit(self, event_type: EventType, channel: int, *data: int) -> MidiEvent:
        return MidiEvent.channel_message(self._flush_delay(), event_type, channel, *data)

    def _flush_delay(self) -> int:
        """Return the pending delay and reset it."""
        delay = self.pending_delay
        if delay > MAX_VARLEN_VALUE:
            raise MalformedEventError(f"Delay of {delay} ticks exceeds the MIDI limit", self.offset)
        self.pending_delay = 0
        return delay

    def _read_delay(self) -> None:
        start = self.offset
        try:
            self.pending_delay += read_varlen(self.stream)
        except EOFError:
            raise TruncatedInputError("event delay", start) from None

    def _read_byte(self, what: str) -> int:
        raw = self.stream.read(1)
        if not raw:
            raise TruncatedInputError(what, self.offset)
        return raw[0]
