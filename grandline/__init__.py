"""Grand Line Monopoly: turn engine, persistence and HTTP API."""

__version__ = "0.1.0"
