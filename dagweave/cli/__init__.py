"""Command line interface for dagweave."""
