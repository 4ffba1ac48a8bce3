"""Live MIDI performance command."""

import asyncio
import logging
from datetime import datetime
from typing import Optional

import click

from drumpad.app import DrumpadApp
from drumpad.cli.context import handle_errors, load_config
from drumpad.models import PadKey
from drumpad.protocols import PlaybackEvent

logger = logging.getLogger(__name__)


class PadEventPrinter:
    """StateObserver echoing pad events to the terminal."""

    def on_playback_event(self, event: PlaybackEvent, key: PadKey) -> None:
        if event is PlaybackEvent.PAD_FINISHED:
            return
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        click.echo(f"[{timestamp}] {key} {event.value}")


@click.command()
@click.option("--port", "-p", type=str, default=None,
              help="MIDI input port (default: from config, then first available)")
@click.option("--bpm", type=float, default=None, help="Retrigger tempo (default: from config)")
@click.option("--hold-mode/--one-shot", "hold_mode", default=None,
              help="Play mode (default: from config)")
@click.option("--quiet", "-q", is_flag=True, help="Don't echo pad events")
@click.pass_context
@handle_errors
def run(ctx: click.Context, port: Optional[str], bpm: Optional[float], hold_mode: Optional[bool], quiet: bool):
    """
    Play the kit from a MIDI pad controller.

    Samples load in the background; each pad becomes playable as soon as
    its sample is ready. Press Ctrl+C to stop.
    """
    config = load_config(ctx)
    app = DrumpadApp(config, hold_mode=hold_mode, bpm=bpm)
    if not quiet:
        app.register_observer(PadEventPrinter())

    async def _run() -> None:
        session = await app.start()
        try:
            port_name = app.open_midi(port)
            click.echo(f"Listening on {port_name} ({session.settings.mode.value}, {session.settings.bpm:g} BPM)")
            click.echo("Press Ctrl+C to stop\n")

            collector = await app.load_kit()
            if collector.has_errors:
                click.echo(collector.get_summary(), err=True)

            await asyncio.Event().wait()
        finally:
            app.shutdown()

    asyncio.run(_run())
