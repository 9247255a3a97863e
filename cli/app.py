"""
musparser - MUS to MIDI converter.

Converts MUS scores from DOS-era games to Standard MIDI Files.
"""

import typer

from cli.commands.convert import convert

# A single command, so the CLI is simply: musparser <infile> <outfile>
app = typer.Typer(
    name="musparser",
    help="Convert MUS music files to Standard MIDI Files.",
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="convert")(convert)


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
