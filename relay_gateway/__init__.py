"""Generative-text relay gateway."""
