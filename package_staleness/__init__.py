"""
Package Staleness Tool

A tool for reporting npm dependencies that have not published a release within a threshold.
"""

__version__ = "0.1.0"

from .cli import main

__all__ = ["main"]
