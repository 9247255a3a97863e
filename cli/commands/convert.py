"""
Convert command - MUS to MIDI conversion.
"""

from pathlib import Path
import sys

import typer
from loguru import logger
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from musparser.converters.mus_to_midi import ConversionOptions, MusToMidiConverter
from musparser.formats.midi.writer import write_midi_file
from musparser.utils.validation import MusParserError, OutputCreationError

console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route library log records to stderr."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING", format="{level}: {message}")
    logger.enable("musparser")


def version_callback(value: bool) -> None:
    if value:
        from musparser import __version__

        console.print(f"[bold]musparser[/bold] version {__version__}")
        raise typer.Exit()


def convert(
    infile: Path = typer.Argument(..., help="Source MUS file (.mus)"),
    outfile: Path = typer.Argument(..., help="Destination MIDI file (.mid)"),
    strict: bool = typer.Option(
        False, "--strict", help="Reject undefined MUS events instead of converting them"
    ),
    events: bool = typer.Option(False, "--events", "-e", help="List the written MIDI events"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print errors"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
    version: bool = typer.Option(
        False, "--version", "-V", callback=version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    """
    Convert a MUS score to a Standard MIDI File (format 0).

    Examples:

        musparser d_e1m1.mus e1m1.mid

        musparser d_e1m1.mus e1m1.mid --events
    """
    from cli.display.tables import display_channel_map, display_midi_events, display_mus_header

    configure_logging(verbose)

    if not infile.is_file():
        console.print(f"[red]Error: Source file not found: {infile}[/red]")
        raise typer.Exit(1)

    converter = MusToMidiConverter(ConversionOptions(strict=strict))

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
        disable=quiet,
    ) as progress:
        task = progress.add_task("Converting MUS to MIDI...", total=None)

        try:
            midi_data = converter.convert(infile)
            write_midi_file(midi_data, outfile)
        except OutputCreationError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)
        except (MusParserError, OSError) as e:
            console.print(f"[red]Error: {e}[/red]")
            if verbose:
                console.print_exception()
            raise typer.Exit(1)

        progress.update(task, description="Done!")

    if quiet:
        return

    display_mus_header(converter.score.header, converter.instruments)
    if verbose:
        display_channel_map(converter.channel_map)
    if events:
        display_midi_events(midi_data)

    console.print(f"[green]Converted:[/green] {infile} -> {outfile}")
    console.print(
        f"[dim]Output size: {len(midi_data)} bytes ({converter.event_count} MUS events)[/dim]"
    )
    console.print("done")
