"""
Seasonal App - Calendar Event Pattern Engine

A research library that detects recurring calendar-driven and statistical
patterns in historical price series. Computes the financial event calendar,
labels bars by seasonal period and macro event, detects combined high-impact
event weeks, and aggregates per-bucket performance statistics.
"""

__version__ = "0.1.0"
__author__ = "Seasonal App Team"
