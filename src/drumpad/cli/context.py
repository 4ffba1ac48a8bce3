"""Shared helpers for CLI commands."""

import functools
import logging
import sys
from pathlib import Path

import click

from drumpad.exceptions import format_error_for_display
from drumpad.models import DEFAULT_CONFIG_PATH, DrumpadConfig, PadKey

logger = logging.getLogger(__name__)


def config_path(ctx: click.Context) -> Path:
    """Config file selected with --config (or the default)."""
    obj = ctx.find_root().obj or {}
    return obj.get("config_path") or DEFAULT_CONFIG_PATH


def load_config(ctx: click.Context) -> DrumpadConfig:
    """Load the configuration selected on the command line."""
    return DrumpadConfig.load_or_default(config_path(ctx))


def resolve_pad(category: str, index: int) -> PadKey:
    """Resolve CATEGORY INDEX arguments, failing with a usage error."""
    key = PadKey.resolve(category, index)
    if key is None:
        raise click.BadParameter(f"no pad {category}-{index}", param_hint="CATEGORY INDEX")
    return key


def report_error(error: Exception) -> None:
    """Print an error the way every command reports it."""
    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    ctx = click.get_current_context(silent=True)
    log_path = ctx.find_root().obj.get("log_path") if ctx and ctx.find_root().obj else None
    if log_path:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)
    click.echo("For logging options, run: drumpad --help", err=True)


def handle_errors(func):
    """
    Turn exceptions escaping a command into a clean message and exit code 1.

    Click's own usage errors and aborts pass through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (click.ClickException, click.Abort):
            raise
        except KeyboardInterrupt:
            logger.info("Interrupted by user")
            click.echo("\nShutting down...", err=True)
        except Exception as e:
            logger.exception(f"Error running {func.__name__}")
            report_error(e)
            sys.exit(1)

    return wrapper
