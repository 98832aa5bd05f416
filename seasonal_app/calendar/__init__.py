"""
Financial event calendar.

Computes and indexes recurring and date-specific market events for a
multi-year horizon and answers membership queries.
"""

from .engine import EventCalendar
from .models import CalendarEvent, EventImpact, EventType

__all__ = ["EventCalendar", "CalendarEvent", "EventImpact", "EventType"]
