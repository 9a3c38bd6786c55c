"""Command line interface for Wise."""
