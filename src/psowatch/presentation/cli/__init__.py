"""Command-line interface for psowatch."""
