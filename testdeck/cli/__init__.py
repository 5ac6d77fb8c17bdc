"""Command line tools for testdeck."""
