"""Dive - chat with the notes in your vault."""

__version__ = "0.1.0"
