"""Audio command implementations."""

import click

from drumpad.cli.context import handle_errors


@click.group(name="audio")
def audio_group():
    """Audio device commands."""
    pass


@audio_group.command(name="list")
@click.option("--low-latency", is_flag=True, help="Only show devices on low-latency host APIs")
@handle_errors
def list_audio(low_latency: bool):
    """List available audio output devices."""
    from drumpad.audio.device import AudioDevice

    devices = AudioDevice.list_output_devices(low_latency_only=low_latency)

    click.echo("Audio Output Devices:\n")
    if not devices:
        click.echo("  No audio output devices found.")
        return

    for device_id, name, host_api in devices:
        click.echo(f"  [{device_id}] {name}")
        click.echo(f"      Host API: {host_api}")
