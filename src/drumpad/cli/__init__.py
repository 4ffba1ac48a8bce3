"""Command line interface for drumpad."""

from .main import cli

__all__ = ["cli"]
