"""Command-line interface for goldfile."""
