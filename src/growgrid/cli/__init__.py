"""Command-line interface for growgrid."""
