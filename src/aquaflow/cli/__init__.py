"""Command-line interface for AquaFlow."""
