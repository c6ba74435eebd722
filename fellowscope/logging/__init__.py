"""Logging setup and the diagnostics log buffer."""
