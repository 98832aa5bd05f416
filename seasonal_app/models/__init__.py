"""
Data models and contracts module.

Immutable data structures for price bars, seasonal patterns, event
combinations and analysis results. All are frozen dataclasses; results are
recomputed per request and never mutated in place.
"""
