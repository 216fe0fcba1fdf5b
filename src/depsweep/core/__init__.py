"""Scanning core."""
