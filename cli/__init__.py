"""Command line interface for loggap."""
