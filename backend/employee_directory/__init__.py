"""Employee directory: REST API over a database or a JSON file store."""

__version__ = "0.1.0"
