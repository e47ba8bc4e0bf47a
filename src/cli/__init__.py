"""Command line interface for esarrow."""
