"""nomouse: generate, run and copy competitive programming solutions."""

__version__ = "1.0.0"
