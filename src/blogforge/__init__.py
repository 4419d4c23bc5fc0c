"""blogforge — content management CLI for Markdown blogs."""

__version__ = "0.4.0"
