"""MUS format handlers."""

from musparser.formats.mus.binary_parser import MusParser
from musparser.formats.mus.decoder import ChannelMapper, MusEventDecoder
from musparser.formats.mus.reader import MusReader

__all__ = ["MusParser", "ChannelMapper", "MusEventDecoder", "MusReader"]
