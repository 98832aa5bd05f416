"""Utility modules for the seasonal analysis engine."""
