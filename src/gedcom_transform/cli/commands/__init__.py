
"""
CLI command modules for gedcom_transform.

Each command module defines a single Typer-compatible command function.
"""

from gedcom_transform.cli.commands.generate import generate_command
from gedcom_transform.cli.commands.parse import parse_command
from gedcom_transform.cli.commands.stats import stats_command

__all__ = [
    "generate_command",
    "parse_command",
    "stats_command",
]
