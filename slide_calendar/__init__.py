"""Semester calendar generator for slide decks."""

__version__ = "0.1.0"
