"""Recurring daily activity windows.

This package decides whether a daily window is active and how long until it
starts, ends, or reaches its next interval tick. Window edges are clock times
or offsets from sunrise/sunset. A small Flask app exposes the state over HTTP.
"""

from .boundary import Absolute, ParseError, Relative, parse_boundary
from .window import NOT_APPLICABLE, Window, new_window

__all__ = [
    "Absolute",
    "NOT_APPLICABLE",
    "ParseError",
    "Relative",
    "Window",
    "new_window",
    "parse_boundary",
]
