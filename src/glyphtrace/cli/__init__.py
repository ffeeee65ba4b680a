"""Command-line interface for glyphtrace.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Guide previews with per-character bounds
- Replays of recorded pointer sessions with coverage tables
- Verbose/quiet output modes
"""

from glyphtrace.cli.app import cli, main

__all__ = ["cli", "main"]
