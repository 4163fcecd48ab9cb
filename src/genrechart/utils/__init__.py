"""Utility functions for genrechart."""

from .gui_defaults import setUpGuiDefaults
from .logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "setUpGuiDefaults",
]
