"""Command-line client for Steam game and achievement statistics."""

from .constants import VERSION

__version__ = VERSION
