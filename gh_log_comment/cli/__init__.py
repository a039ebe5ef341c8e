"""Command line interface for gh-log-comment."""
