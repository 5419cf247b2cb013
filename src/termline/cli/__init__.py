"""Command line interface for termline."""
