"""Structural validation of serialized cycle records."""
