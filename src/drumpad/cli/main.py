"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from drumpad import __version__

from .commands import audio_group, bounce, config, midi_group, pads, play, run

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path.home() / ".drumpad" / "logs"


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Where setup_logging writes for the given flags."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "drumpad-debug.log"
    return DEFAULT_LOG_DIR / "drumpad.log"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)

    Returns:
        Path of the log file
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Explicit level wins when logging to a custom file
    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    file_handler.set_name("drumpad")

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if handler.get_name() == "drumpad":
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group()
@click.version_option(version=__version__, prog_name="drumpad")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.drumpad/config.json)",
)
@click.option(
    "-v", "--verbose",
    count=True,
    help="Increase verbosity (-v: INFO, -vv: DEBUG)",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug mode (DEBUG level, logs to ./drumpad-debug.log)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Custom log file path",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Log level for file logging (default: INFO)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str,
):
    """
    Drumpad - tempo-locked drum pad sampler.

    Four rows of eight pads (kick, hihat, synth, clap). In hold mode a
    held pad retriggers on every beat of the current tempo; in one-shot
    mode each press plays the sample once.

    \b
    Examples:
      # Play from a MIDI pad controller
      drumpad run

      # Retrigger kick 0 for two seconds at 140 BPM
      drumpad play kick 0 --hold 2 --bpm 140

      # Render the same thing to a file
      drumpad bounce kick 0 kick.wav --hold 2 --bpm 140

      # Check which samples load
      drumpad pads

      # List audio / MIDI devices
      drumpad audio list
      drumpad midi list
    """
    log_path = setup_logging(verbose, debug, log_file, log_level)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_file
    ctx.obj["log_path"] = log_path


cli.add_command(audio_group)
cli.add_command(midi_group)
cli.add_command(config)
cli.add_command(pads)
cli.add_command(play)
cli.add_command(bounce)
cli.add_command(run)

if __name__ == "__main__":
    cli()
