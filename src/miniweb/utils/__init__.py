"""Shared helpers for miniweb."""
