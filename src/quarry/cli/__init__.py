"""CLI package for Quarry.

The CLI is a thin wrapper around the commands layer.
"""

from quarry.cli.app import app, console

__all__ = ["app", "console"]
