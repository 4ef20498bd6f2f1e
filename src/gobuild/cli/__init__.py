"""Command-line entry points for gobuild."""
