"""Utility layer."""
