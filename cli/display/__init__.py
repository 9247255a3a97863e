"""
CLI display modules.
"""

from cli.display.tables import (
    display_mus_header,
    display_channel_map,
    display_midi_events,
)

__all__ = [
    "display_mus_header",
    "display_channel_map",
    "display_midi_events",
]
