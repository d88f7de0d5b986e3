"""Incremental machine translation for nested localization files."""

__version__ = "0.1.0"
