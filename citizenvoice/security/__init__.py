"""Secrets loading and row-level access policies."""
