"""Utility helpers for the CLI."""
