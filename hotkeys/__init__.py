"""Ranked keyboard-shortcut search with fuzzy and abbreviation matching."""

__version__ = "1.0.0"
