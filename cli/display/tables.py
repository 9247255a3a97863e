"""
Rich table displays for conversion diagnostics.
"""

from typing import Dict, List
import io

import mido
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from musparser.models.mus import MusHeader


console = Console()


def display_mus_header(header: MusHeader, instruments: List[int]) -> None:
    """Display MUS header fields and the instrument patch table."""

    status = "[green]Valid[/green]" if header.is_valid() else "[yellow]Non-standard[/yellow]"
    signature = " ".join(f"{b:02X}" for b in header.signature)

    header_content = f"""[bold]Signature:[/bold] {signature} ({status})
[bold]Song Length:[/bold] {header.song_length} bytes
[bold]Song Offset:[/bold] 0x{header.song_offset:04X}
[bold]Channels:[/bold] {header.primary_channels} primary, {header.secondary_channels} secondary
[bold]Instruments:[/bold] {header.instrument_count}"""

    console.print(
        Panel(
            header_content,
            title="[bold blue]MUS Header[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    if not instruments:
        return

    table = Table(title="Instrument Patches", box=box.ROUNDED, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Patch", style="cyan", width=6)
    table.add_column("Kind", width=12)

    for i, patch in enumerate(instruments):
        # Patches 135-181 are percussion notes 35-81
        kind = "Percussion" if patch >= 135 else "Melodic"
        table.add_row(str(i), str(patch), kind)

    console.print(table)


def display_channel_map(channel_map: Dict[int, int]) -> None:
    """Display the MUS to MIDI channel assignments."""
    table = Table(title="Channel Map", box=box.SIMPLE, header_style="bold green")
    table.add_column("MUS", width=5)
    table.add_column("MIDI", width=5)

    for mus_channel in sorted(channel_map):
        midi_channel = channel_map[mus_channel]
        label = f"{midi_channel} [dim](drums)[/dim]" if midi_channel == 9 else str(midi_channel)
        table.add_row(str(mus_channel), label)

    console.print(table)


def display_midi_events(midi_data: bytes, limit: int = 64) -> None:
    """
    Display the first events of a converted MIDI file.

    The data is parsed back with mido, so anything shown here has been
    read by an independent MIDI reader.
    """
    midi = mido.MidiFile(file=io.BytesIO(midi_data))
    track = midi.tracks[0]

    table = Table(
        title=f"MIDI Track (type {midi.type}, {midi.ticks_per_beat} ticks/beat)",
        box=box.ROUNDED,
        header_style="bold yellow",
    )
    table.add_column("#", style="dim")
    table.add_column("Tick", style="dim")
    table.add_column("Delta")
    table.add_column("Event", style="cyan", no_wrap=True)
    table.add_column("Ch")
    table.add_column("Data")

    tick = 0
    for i, msg in enumerate(track):
        tick += msg.time
        if i >= limit:
            continue
        channel = str(msg.channel) if hasattr(msg, "channel") else ""
        table.add_row(str(i), str(tick), str(msg.time), msg.type, channel, _message_data(msg))

    console.print(table)

    if len(track) > limit:
        console.print(f"[dim]... {len(track) - limit} more events ...[/dim]")
    console.print(f"[dim]Length: {tick} ticks ({midi.length:.1f} s at 120 BPM)[/dim]")


def _message_data(msg: mido.Message) -> str:
    if msg.type in ("note_on", "note_off"):
        return f"note={msg.note} vel={msg.velocity}"
    if msg.type == "control_change":
        return f"control={msg.control} value={msg.value}"
    if msg.type == "program_change":
        return f"program={msg.program}"
    if msg.type == "pitchwheel":
        return f"pitch={msg.pitch}"
    return ""
