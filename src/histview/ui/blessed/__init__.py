"""Blessed terminal UI for browsing shell history."""
