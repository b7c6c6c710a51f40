"""Utility helpers for Little Journey."""
