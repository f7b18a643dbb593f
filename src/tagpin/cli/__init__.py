"""Command-line interface for tagpin."""
