"""Translate Japanese text embedded in source files to English."""

__version__ = "0.1.0"
