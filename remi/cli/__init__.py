"""Command line interface for Remi."""
