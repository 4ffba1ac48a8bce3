"""Pad inspection and playback commands."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import click
import soundfile as sf

from drumpad.app import DrumpadApp
from drumpad.audio import KitLoader, MixerRenderer, SampleLoader
from drumpad.bounce import render_pad
from drumpad.cli.context import handle_errors, load_config, resolve_pad
from drumpad.core import ManualScheduler, PadSession, SampleStore
from drumpad.models import Category, PadKey

logger = logging.getLogger(__name__)

CATEGORY_CHOICE = click.Choice([c.value for c in Category], case_sensitive=False)


@click.command()
@click.pass_context
@handle_errors
def pads(ctx: click.Context):
    """Load the kit and report which pads have a sample."""
    config = load_config(ctx)
    store = SampleStore()
    collector = KitLoader(config).load_into(store)
    failures = dict(collector.errors)

    click.echo(f"Kit: {config.sounds_dir}\n")
    for key in PadKey.all():
        name = config.sample_files[key.category][key.index]
        if key in store:
            audio = store.get_key(key)
            status = f"ok ({audio.duration:.2f}s)"
        else:
            error = failures.get(f"load {key}")
            status = getattr(error, "user_message", None) or str(error)
        click.echo(f"  {str(key):<8} {name:<14} {status}")

    click.echo(f"\nLoaded {len(store)} of {len(failures) + len(store)} pads")


def _apply_overrides(session: PadSession, hold_mode: Optional[bool], bpm: Optional[float]) -> None:
    if hold_mode is not None:
        session.set_hold_mode(hold_mode)
    if bpm is not None:
        applied = session.set_bpm(bpm)
        if applied != bpm:
            click.echo(f"Tempo clamped to {applied:g} BPM", err=True)


@click.command()
@click.argument("category", type=CATEGORY_CHOICE)
@click.argument("index", type=int)
@click.option("--hold", "hold_seconds", type=click.FloatRange(min=0), default=2.0, show_default=True,
              help="Seconds to keep the pad pressed")
@click.option("--tail", type=click.FloatRange(min=0), default=1.0, show_default=True,
              help="Seconds to keep the stream open after release")
@click.option("--bpm", type=float, default=None, help="Retrigger tempo (default: from config)")
@click.option("--hold-mode/--one-shot", "hold_mode", default=None,
              help="Play mode (default: from config)")
@click.pass_context
@handle_errors
def play(
    ctx: click.Context,
    category: str,
    index: int,
    hold_seconds: float,
    tail: float,
    bpm: Optional[float],
    hold_mode: Optional[bool],
):
    """Press one pad on the audio output, then release it."""
    config = load_config(ctx)
    key = resolve_pad(category, index)
    app = DrumpadApp(config, hold_mode=hold_mode, bpm=bpm)

    async def _play() -> bool:
        session = await app.start()
        try:
            await app.load_pad(key)
            click.echo(f"Playing {key} ({session.settings.mode.value}, {session.settings.bpm:g} BPM)")
            return await app.play_pad(key, hold_seconds, tail)
        finally:
            app.shutdown()

    if not asyncio.run(_play()):
        click.echo(f"{key} did not play", err=True)


@click.command()
@click.argument("category", type=CATEGORY_CHOICE)
@click.argument("index", type=int)
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--hold", "hold_seconds", type=click.FloatRange(min=0), default=2.0, show_default=True,
              help="Seconds between press and release")
@click.option("--tail", type=click.FloatRange(min=0), default=1.0, show_default=True,
              help="Seconds rendered after release")
@click.option("--bpm", type=float, default=None, help="Retrigger tempo (default: from config)")
@click.option("--hold-mode/--one-shot", "hold_mode", default=None,
              help="Play mode (default: from config)")
@click.option("--channels", type=click.IntRange(1, 2), default=2, show_default=True,
              help="Output channels")
@click.pass_context
@handle_errors
def bounce(
    ctx: click.Context,
    category: str,
    index: int,
    output: Path,
    hold_seconds: float,
    tail: float,
    bpm: Optional[float],
    hold_mode: Optional[bool],
    channels: int,
):
    """
    Render one pad press to an audio file.

    Runs the same scheduling as live playback on a virtual clock, so the
    result is exactly what `play` would sound like, only faster than real
    time.
    """
    config = load_config(ctx)
    key = resolve_pad(category, index)

    loader = SampleLoader(target_sample_rate=config.sample_rate, normalize=config.normalize)
    store = SampleStore()
    store.put(key, loader.load(config.sample_path(key)))

    scheduler = ManualScheduler()
    renderer = MixerRenderer(num_channels=channels, master_volume=config.master_volume)
    session = PadSession.from_config(config, renderer, scheduler, store=store)
    _apply_overrides(session, hold_mode, bpm)

    audio = render_pad(
        session, scheduler, renderer, key,
        hold=hold_seconds, tail=tail,
        sample_rate=config.sample_rate, block_size=config.buffer_size,
    )
    sf.write(str(output), audio, config.sample_rate)

    click.echo(
        f"Wrote {output} ({len(audio) / config.sample_rate:.2f}s, "
        f"{session.settings.mode.value}, {session.settings.bpm:g} BPM)"
    )
