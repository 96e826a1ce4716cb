"""Presentation layer (command-line entrypoint)."""
