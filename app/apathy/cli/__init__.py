"""Command-line interface for apathy."""
