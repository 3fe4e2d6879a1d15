"""Command-line interface for xmt."""
