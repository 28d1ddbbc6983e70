"""HTTP API for Grand Line Monopoly."""
