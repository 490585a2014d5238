"""Command-line interface for flatshadow.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Shadow silhouettes straight from path data
- Single icon composition and batch processing
- Progress bars for batch runs
- Verbose/quiet output modes
"""

from flatshadow.cli.app import cli, main

__all__ = ["cli", "main"]
