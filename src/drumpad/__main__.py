"""Allow running as `python -m drumpad`."""

from drumpad.cli.main import cli

if __name__ == "__main__":
    cli()
