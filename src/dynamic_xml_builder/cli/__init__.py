"""Command-line interface for the dynamic XML builder.

This module provides the render and format commands for turning builder
functions and existing files into markup.
"""

from .main import main

__all__ = ["main"]
