"""Command-line interface for formcheck."""
