
"""
CLI package for gedcom_transform.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from gedcom_transform.cli.app import app, main

__all__ = [
    "app",
    "main",
]
