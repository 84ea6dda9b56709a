"""Encoding and validation helpers for legacytx."""
