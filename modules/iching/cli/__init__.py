"""Command line interface for I Ching casting."""
