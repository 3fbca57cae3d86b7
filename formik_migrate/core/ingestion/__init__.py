"""File discovery for analysis and conversion runs."""

from .discovery import discover_files

__all__ = ["discover_files"]
