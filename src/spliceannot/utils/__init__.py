"""
Utility modules for spliceannot.

Provides logging and timing helpers.
"""

from .logging import console, setup_logging, timed

__all__ = [
    "console",
    "setup_logging",
    "timed",
]
