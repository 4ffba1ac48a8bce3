"""Config command implementations."""

import json

import click
from pydantic import ValidationError

from drumpad.cli.context import config_path, handle_errors, load_config
from drumpad.exceptions import wrap_pydantic_error
from drumpad.models import DrumpadConfig


@click.group(name="config")
def config():
    """View and edit the configuration file."""
    pass


@config.command(name="show")
@click.pass_context
@handle_errors
def show_config(ctx: click.Context):
    """Print the effective configuration as JSON."""
    click.echo(load_config(ctx).model_dump_json(indent=2))


@config.command(name="path")
@click.pass_context
def show_path(ctx: click.Context):
    """Print the config file location."""
    click.echo(str(config_path(ctx)))


def _parse_value(raw: str):
    """Interpret a command line value as JSON, falling back to a plain string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@config.command(name="set")
@click.argument("key")
@click.argument("value")
@click.pass_context
@handle_errors
def set_value(ctx: click.Context, key: str, value: str):
    """
    Set one configuration value and save.

    VALUE is parsed as JSON when possible, so numbers, true/false and null
    work as expected.

    \b
    Examples:
      drumpad config set bpm 140
      drumpad config set hold_mode false
      drumpad config set midi_port null
      drumpad config set sounds_dir samples/808
    """
    if key not in DrumpadConfig.model_fields:
        raise click.BadParameter(
            f"unknown setting '{key}' (choose from: {', '.join(DrumpadConfig.model_fields)})",
            param_hint="KEY",
        )

    path = config_path(ctx)
    current = load_config(ctx)
    data = current.model_dump(mode="json")
    data[key] = _parse_value(value)

    try:
        updated = DrumpadConfig.model_validate(data)
    except ValidationError as e:
        raise wrap_pydantic_error(e, str(path)) from e

    updated.save(path)
    click.echo(f"{key} = {json.dumps(updated.model_dump(mode='json')[key])}")
