"""
Logging package for ``gedcom_transform``.

Use ``get_logger(__name__)`` in modules to inherit the shared handlers.
Applications call ``configure_logging()`` once to attach them.
"""

from .logger import (
    configure_logging,
    get_logger,
    list_active_loggers,
    set_debug,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "list_active_loggers",
    "set_debug",
]
