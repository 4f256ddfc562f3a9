"""Command line interface for onedrivepy."""
