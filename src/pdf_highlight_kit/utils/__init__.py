"""Shared helpers for colors and files."""
