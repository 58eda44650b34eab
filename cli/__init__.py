"""Command line entry points for tabledata."""
