"""Core components of onedrivepy: transport, drive items and uploads."""
