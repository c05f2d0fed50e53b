"""Command-line interface for add-remote."""
