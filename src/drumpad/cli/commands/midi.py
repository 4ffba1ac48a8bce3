"""MIDI command implementations."""

import click

from drumpad.cli.context import handle_errors, load_config
from drumpad.input import MidiPadInput, pad_to_note
from drumpad.models import VARIANTS_PER_CATEGORY, Category, PadKey


@click.group(name="midi")
def midi_group():
    """MIDI device commands."""
    pass


@midi_group.command(name="list")
@handle_errors
def list_midi():
    """List available MIDI input ports."""
    ports = MidiPadInput.list_ports()

    click.echo("MIDI Input Ports:\n")
    if not ports:
        click.echo("  No MIDI input ports found.")
        return

    for i, port in enumerate(ports):
        click.echo(f"  [{i}] {port}")


@midi_group.command(name="map")
@click.pass_context
@handle_errors
def show_map(ctx: click.Context):
    """Show which MIDI note triggers which pad."""
    config = load_config(ctx)

    for category in Category:
        first = pad_to_note(PadKey(category=category, index=0), config.midi_base_note)
        notes = " ".join(f"{first + i:3d}" for i in range(VARIANTS_PER_CATEGORY))
        click.echo(f"  {category.value:<6} {notes}")
