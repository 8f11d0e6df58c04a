"""Command-line interface for distrokit."""
