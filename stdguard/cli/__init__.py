"""Command-line interface for stdguard."""

from .main import main

__all__ = ["main"]
