"""Command-line interface for serial-dedupe."""

from serial_dedupe.cli.main import app, main

__all__ = ["app", "main"]
