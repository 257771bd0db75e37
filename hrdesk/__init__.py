"""HR Desk: human-resources REST API."""

__version__ = "0.1.0"
