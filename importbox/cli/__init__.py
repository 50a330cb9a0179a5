"""Command line tools for importbox."""
