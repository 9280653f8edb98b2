"""Build the RSS feed of a Markdown blog."""

__version__ = "0.1.0"
