"""Textual screens for sesh."""
